"""User Rules — signup roles, self-or-admin access, password-change guard."""

import pytest

from votecerto.core.domain_types import UserRole
from votecerto.core.errors import AuthorizationError, InputValidationError
from votecerto.core.user_rules import (
    check_user_access, check_user_create, check_user_delete,
    check_user_list, check_user_update,
)


def test_anonymous_signup_only_participant():
    check_user_create(None, UserRole.PARTICIPANTE)
    with pytest.raises(AuthorizationError):
        check_user_create(None, UserRole.GESTOR)


def test_admin_creates_any_role(admin):
    check_user_create(admin, UserRole.ADMIN)
    check_user_create(admin, UserRole.GESTOR)


def test_manager_cannot_create_admin(manager):
    with pytest.raises(AuthorizationError):
        check_user_create(manager, UserRole.ADMIN)


def test_list_is_admin_only(admin, manager):
    check_user_list(admin)
    with pytest.raises(AuthorizationError):
        check_user_list(manager)


def test_access_self_or_admin(admin, participant):
    check_user_access(participant, participant.user_id)
    check_user_access(admin, participant.user_id)
    with pytest.raises(AuthorizationError):
        check_user_access(participant, admin.user_id)


def test_self_password_change_needs_current_password(participant):
    with pytest.raises(InputValidationError):
        check_user_update(
            participant, participant.user_id,
            changes_role=False, changes_password=True, has_current_password=False,
        )
    assert check_user_update(
        participant, participant.user_id,
        changes_role=False, changes_password=True, has_current_password=True,
    ) is True


def test_admin_resets_other_password_without_current(admin, participant):
    assert check_user_update(
        admin, participant.user_id,
        changes_role=False, changes_password=True, has_current_password=False,
    ) is False


def test_only_admin_changes_role(admin, participant):
    check_user_update(
        admin, participant.user_id,
        changes_role=True, changes_password=False, has_current_password=False,
    )
    with pytest.raises(AuthorizationError):
        check_user_update(
            participant, participant.user_id,
            changes_role=True, changes_password=False, has_current_password=False,
        )


def test_delete_admin_only_and_not_self(admin, participant):
    check_user_delete(admin, participant.user_id)
    with pytest.raises(AuthorizationError):
        check_user_delete(admin, admin.user_id)
    with pytest.raises(AuthorizationError):
        check_user_delete(participant, 99)
