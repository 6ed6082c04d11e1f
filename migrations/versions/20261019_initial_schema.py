"""
Initial schema for the admin reference data.

Tables: languages, currencies, countries, manage_dropdowns, email_templates,
meta_settings, campaign_faqs, lead_investors
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'initial_schema_20261019'
down_revision = None
branch_labels = None
depends_on = None


def _key_columns():
    return [
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('public_id', sa.String(36), nullable=False, unique=True),
    ]


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'languages',
        *_key_columns(),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('folder', sa.String(20), nullable=False, unique=True),
        sa.Column('iso2', sa.String(2), nullable=False),
        sa.Column('iso3', sa.String(3), nullable=False),
        sa.Column('flag_image', sa.String(500), nullable=True),
        sa.Column('direction', sa.String(3), nullable=False, server_default='ltr'),
        sa.Column('status', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_default', sa.String(3), nullable=False, server_default='NO'),
        *_timestamps(),
        sa.CheckConstraint("direction in ('ltr','rtl')", name='ck_languages_direction'),
        sa.CheckConstraint("is_default in ('YES','NO')", name='ck_languages_is_default'),
    )
    op.create_index('idx_languages_status', 'languages', ['status'])
    op.create_index('idx_languages_is_default', 'languages', ['is_default'])

    op.create_table(
        'currencies',
        *_key_columns(),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('code', sa.String(10), nullable=False, unique=True),
        sa.Column('symbol', sa.String(10), nullable=False),
        sa.Column('status', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('use_count', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('idx_currencies_status', 'currencies', ['status'])

    op.create_table(
        'countries',
        *_key_columns(),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('iso2', sa.String(2), nullable=False),
        sa.Column('iso3', sa.String(3), nullable=False),
        sa.Column('flag', sa.String(500), nullable=True),
        sa.Column('is_default', sa.String(3), nullable=False, server_default='NO'),
        sa.Column('status', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('use_count', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.CheckConstraint("is_default in ('YES','NO')", name='ck_countries_is_default'),
    )
    op.create_index('idx_countries_iso2', 'countries', ['iso2'])

    op.create_table(
        'manage_dropdowns',
        *_key_columns(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('unique_code', sa.Integer(), nullable=False),
        sa.Column('dropdown_type', sa.String(50), nullable=False),
        sa.Column('country_short_code', sa.String(10), nullable=True),
        sa.Column('is_default', sa.String(3), nullable=True),
        sa.Column('language_id', sa.String(36), sa.ForeignKey('languages.id'), nullable=False),
        sa.Column('status', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('use_count', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('idx_manage_dropdowns_type', 'manage_dropdowns', ['dropdown_type'])
    op.create_index('idx_manage_dropdowns_language_id', 'manage_dropdowns', ['language_id'])
    op.create_index('idx_manage_dropdowns_unique_code', 'manage_dropdowns', ['unique_code'])
    op.create_index('idx_manage_dropdowns_type_language', 'manage_dropdowns', ['dropdown_type', 'language_id'])
    op.create_index('idx_manage_dropdowns_type_status', 'manage_dropdowns', ['dropdown_type', 'status'])

    op.create_table(
        'email_templates',
        *_key_columns(),
        sa.Column('language_id', sa.String(36), sa.ForeignKey('languages.id'), nullable=False),
        sa.Column('task', sa.String(100), nullable=False),
        sa.Column('sender_email', sa.String(255), nullable=False),
        sa.Column('reply_email', sa.String(255), nullable=False),
        sa.Column('sender_name', sa.String(200), nullable=False),
        sa.Column('subject', sa.String(500), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint('task', 'language_id', name='uq_email_templates_task_language'),
    )
    op.create_index('idx_email_templates_task', 'email_templates', ['task'])
    op.create_index('idx_email_templates_status', 'email_templates', ['status'])

    op.create_table(
        'meta_settings',
        *_key_columns(),
        sa.Column('language_id', sa.String(36), sa.ForeignKey('languages.id'), nullable=False, unique=True),
        sa.Column('site_name', sa.String(255), nullable=False),
        sa.Column('meta_title', sa.String(255), nullable=False),
        sa.Column('meta_description', sa.Text(), nullable=False),
        sa.Column('meta_keyword', sa.Text(), nullable=False),
        sa.Column('og_title', sa.String(255), nullable=False),
        sa.Column('og_description', sa.Text(), nullable=False),
        sa.Column('og_image', sa.String(500), nullable=False),
        sa.Column('is_ai_generated_image', sa.String(3), nullable=False, server_default='NO'),
        *_timestamps(),
        sa.CheckConstraint("is_ai_generated_image in ('YES','NO')", name='ck_meta_settings_ai_image'),
    )

    op.create_table(
        'campaign_faqs',
        *_key_columns(),
        sa.Column('equity_id', sa.String(36), nullable=False),
        sa.Column('question_id', sa.String(36), nullable=True),
        sa.Column('answer', sa.Text(), nullable=True),
        sa.Column('custom_question', sa.Text(), nullable=True),
        sa.Column('custom_answer', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_campaign_faqs_equity_id', 'campaign_faqs', ['equity_id'])

    op.create_table(
        'lead_investors',
        *_key_columns(),
        sa.Column('equity_id', sa.String(36), nullable=False),
        sa.Column('investor_photo', sa.String(500), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('investor_type', sa.String(100), nullable=False),
        sa.Column('bio', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_lead_investors_equity_id', 'lead_investors', ['equity_id'])


def downgrade() -> None:
    for table in (
        'lead_investors',
        'campaign_faqs',
        'meta_settings',
        'email_templates',
        'manage_dropdowns',
        'countries',
        'currencies',
        'languages',
    ):
        op.drop_table(table)
