from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Used by the post expiry sweep

    # AWS S3 for avatars (falls back to Supabase Storage when not configured)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None
    s3_public_base_url: Optional[str] = None  # e.g. CDN in front of the bucket

    # Supabase Storage
    media_bucket: str = "aibook-media"

    # Frontend origin used in magic-link and recovery redirects
    site_url: str = "http://localhost:3000"

    # Business verification
    verification_webhook_test_url: str = "https://stembot.app.n8n.cloud/webhook-test/828b57a6-71c3-49ba-8622-83c8d7b14b91"
    verification_webhook_url: str = "https://stembot.app.n8n.cloud/webhook/828b57a6-71c3-49ba-8622-83c8d7b14b91"
    webhook_timeout_seconds: float = 10.0
    max_verification_attempts: int = 3

    # Contact support relay
    support_relay_url: str = "https://formspree.io/f/placeholder"
    support_rate_limit_minutes: int = 15
    support_email: str = "contact@aimeetplace.com"

    # Video previews
    oembed_url: str = "https://noembed.com/embed"

    # Business posts
    post_ttl_days: int = 30
    post_expiry_sweep_enabled: bool = False
    post_expiry_sweep_seconds: int = 300

    # App
    app_name: str = "aimarketspace-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def s3_configured(self) -> bool:
        return all([self.aws_access_key_id, self.aws_secret_access_key, self.s3_bucket_name])

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
