# migrations/versions/20261019_create_certificates.py
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_create_certificates"
down_revision = None
branch_labels = None
depends_on = None

STATUSES = ("Valid", "Expired", "Revoked")


def upgrade():
    op.create_table(
        "certificates",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("certificate_number", sa.String(64), nullable=False),
        sa.Column("certificate_holder", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("date_of_issue", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*STATUSES, name="certificate_status", native_enum=False, length=16),
            nullable=False,
            server_default="Valid",
        ),
        sa.Column("compliance_body", sa.String(160), nullable=False, server_default="Dilify"),
        sa.Column("country_of_origin", sa.String(120), nullable=True),
        sa.Column("certificate_canva_link", sa.String(512), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_certificates"),
    )
    op.create_index("ix_certificates_certificate_number", "certificates", ["certificate_number"], unique=True)


def downgrade():
    op.drop_index("ix_certificates_certificate_number", table_name="certificates")
    op.drop_table("certificates")
