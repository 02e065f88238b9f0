"""User Rules — pure authorization for signup and account management.

Invariants:
    - Anonymous signup only creates Participants; other roles need an Admin caller
    - Listing and deletion are Admin-only; an Admin cannot delete their own account
    - Self-service edits cannot change the role; password change by self requires senha_atual
"""

from votecerto.core.access_policy import Capability, has_capability, require_capability
from votecerto.core.domain_types import Identity, UserRole
from votecerto.core.errors import AuthorizationError, InputValidationError


def check_user_create(identity: Identity | None, role: UserRole) -> None:
    if role == UserRole.PARTICIPANTE:
        return
    if identity is None or not has_capability(identity, Capability.MANAGE_USERS):
        raise AuthorizationError(
            "Apenas administradores podem criar administradores e gestores",
        )


def check_user_list(identity: Identity) -> None:
    require_capability(
        identity, Capability.MANAGE_USERS,
        "Apenas administradores podem listar usuários",
    )


def check_user_access(identity: Identity, target_id: int) -> None:
    """Self or Admin."""
    if target_id != identity.user_id and not has_capability(
        identity, Capability.MANAGE_USERS,
    ):
        raise AuthorizationError("Você não tem permissão para acessar este usuário")


def check_user_update(
    identity: Identity,
    target_id: int,
    changes_role: bool,
    changes_password: bool,
    has_current_password: bool,
) -> bool:
    """Validate an update. Returns True when the current password must be verified."""
    check_user_access(identity, target_id)
    is_admin = has_capability(identity, Capability.MANAGE_USERS)
    if changes_role and not is_admin:
        raise AuthorizationError("Apenas administradores podem alterar o tipo de usuário")
    is_self = target_id == identity.user_id
    if changes_password and is_self:
        if not has_current_password:
            raise InputValidationError(
                "Senha atual é obrigatória para alterar a senha",
            )
        return True
    return False


def check_user_delete(identity: Identity, target_id: int) -> None:
    require_capability(
        identity, Capability.MANAGE_USERS,
        "Apenas administradores podem excluir usuários",
    )
    if target_id == identity.user_id:
        raise AuthorizationError("Você não pode excluir sua própria conta")
