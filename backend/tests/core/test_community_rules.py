"""Community Rules — create, manage, visibility and code disclosure."""

from dataclasses import replace

import pytest

from votecerto.core.community_rules import (
    can_see_code, check_code_regeneration, check_community_create,
    check_community_delete, check_community_edit, check_community_visible,
)
from votecerto.core.errors import AuthorizationError, ResourceNotFoundError


def test_create_requires_manager_or_admin(admin, manager, participant):
    check_community_create(admin)
    check_community_create(manager)
    with pytest.raises(AuthorizationError):
        check_community_create(participant)


def test_creator_and_admin_manage(admin, manager, community):
    for check in (check_community_edit, check_community_delete, check_code_regeneration):
        check(manager, community)
        check(admin, community)


def test_other_manager_cannot_manage(manager, community):
    outsider = replace(manager, user_id=50)
    for check in (check_community_edit, check_community_delete, check_code_regeneration):
        with pytest.raises(AuthorizationError):
            check(outsider, community)


def test_visible_to_members(participant, community):
    assert check_community_visible(participant, community, is_member=True) is community


def test_hidden_from_outsiders_as_404(participant, community):
    with pytest.raises(ResourceNotFoundError):
        check_community_visible(participant, community, is_member=False)


def test_missing_community_404(admin):
    with pytest.raises(ResourceNotFoundError):
        check_community_visible(admin, None, is_member=False)


def test_code_only_for_creator_or_admin(admin, manager, participant, community):
    assert can_see_code(manager, community)
    assert can_see_code(admin, community)
    assert not can_see_code(participant, community)
