"""Community Rules — pure authorization for community CRUD, join and code disclosure.

Invariants:
    - Only Managers and Admins create communities
    - Edit, delete and code regeneration: creator or Admin
    - Invite code disclosed only to the creator or an Admin
    - Detail visible to Admin, creator, or members
"""

from votecerto.core.access_policy import (
    Capability, can_manage, require_capability, require_manage,
)
from votecerto.core.domain_types import Identity
from votecerto.core.errors import ResourceNotFoundError
from votecerto.core.repository_protocols import CommunityLike


def check_community_create(identity: Identity) -> None:
    require_capability(
        identity, Capability.CREATE_COMMUNITY,
        "Apenas gestores e administradores podem criar comunidades",
    )


def check_community_edit(identity: Identity, community: CommunityLike) -> None:
    require_manage(
        identity, community.criador_id,
        "Você não tem permissão para editar esta comunidade",
    )


def check_community_delete(identity: Identity, community: CommunityLike) -> None:
    require_manage(
        identity, community.criador_id,
        "Você não tem permissão para excluir esta comunidade",
    )


def check_code_regeneration(identity: Identity, community: CommunityLike) -> None:
    require_manage(
        identity, community.criador_id,
        "Você não tem permissão para regenerar o código desta comunidade",
    )


def check_community_visible(
    identity: Identity, community: CommunityLike | None, is_member: bool,
) -> CommunityLike:
    # Hidden communities answer 404, not 403: their existence is not disclosed.
    if community is None or not (can_manage(identity, community.criador_id) or is_member):
        raise ResourceNotFoundError("Comunidade não encontrada")
    return community


def can_see_code(identity: Identity, community: CommunityLike) -> bool:
    return can_manage(identity, community.criador_id)
