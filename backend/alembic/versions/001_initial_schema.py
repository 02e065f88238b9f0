"""Initial schema — usuarios, comunidades, participantes, sessoes, projetos, votos.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "usuarios",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("tipo", sa.String(20), nullable=False, server_default="PARTICIPANTE"),
        sa.Column("nome", sa.String(255), nullable=True),
        sa.Column("cpf", sa.String(11), nullable=True),
        sa.Column("data_criacao", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("ultimo_acesso", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("email", name="uq_usuario_email"),
        sa.UniqueConstraint("cpf", name="uq_usuario_cpf"),
    )

    op.create_table(
        "comunidades",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("nome", sa.String(100), nullable=False),
        sa.Column("descricao", sa.Text, nullable=True),
        sa.Column("codigo", sa.String(16), nullable=False),
        sa.Column(
            "criador_id", sa.Integer,
            sa.ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("data_criacao", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("nome", name="uq_comunidade_nome"),
        sa.UniqueConstraint("codigo", name="uq_comunidade_codigo"),
    )

    op.create_table(
        "participantes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "usuario_id", sa.Integer,
            sa.ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "comunidade_id", sa.Integer,
            sa.ForeignKey("comunidades.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("data_ingresso", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("usuario_id", "comunidade_id", name="uq_participante_comunidade"),
    )

    op.create_table(
        "sessoes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("titulo", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text, nullable=True),
        sa.Column("data_inicio", sa.DateTime(timezone=True), nullable=False),
        sa.Column("data_fim", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ativa", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column(
            "criador_id", sa.Integer,
            sa.ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column(
            "comunidade_id", sa.Integer,
            sa.ForeignKey("comunidades.id", ondelete="CASCADE"), nullable=True,
        ),
        sa.Column("data_criacao", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "projetos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("titulo", sa.String(255), nullable=False),
        sa.Column("descricao_detalhada", sa.Text, nullable=True),
        sa.Column("autor_responsavel", sa.String(255), nullable=True),
        sa.Column(
            "sessao_id", sa.Integer,
            sa.ForeignKey("sessoes.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("data_criacao", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("sessao_id", "titulo", name="uq_projeto_titulo_sessao"),
    )

    op.create_table(
        "votos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "usuario_id", sa.Integer,
            sa.ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "sessao_id", sa.Integer,
            sa.ForeignKey("sessoes.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "projeto_id", sa.Integer,
            sa.ForeignKey("projetos.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("comentario", sa.Text, nullable=True),
        sa.Column("data_voto", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("usuario_id", "sessao_id", name="uq_voto_usuario_sessao"),
    )

    op.create_index("ix_sessoes_comunidade_id", "sessoes", ["comunidade_id"])
    op.create_index("ix_projetos_sessao_id", "projetos", ["sessao_id"])
    op.create_index("ix_votos_sessao_id", "votos", ["sessao_id"])


def downgrade() -> None:
    op.drop_index("ix_votos_sessao_id", table_name="votos")
    op.drop_index("ix_projetos_sessao_id", table_name="projetos")
    op.drop_index("ix_sessoes_comunidade_id", table_name="sessoes")
    op.drop_table("votos")
    op.drop_table("projetos")
    op.drop_table("sessoes")
    op.drop_table("participantes")
    op.drop_table("comunidades")
    op.drop_table("usuarios")
