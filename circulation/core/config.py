from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field(default="sqlite:///./circulation.db", alias="DATABASE_URL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Tier table: checkout limits, loan periods and late-fee rates
    regular_max_items: int = Field(default=3, ge=0, alias="REGULAR_MAX_ITEMS")
    regular_loan_period_days: int = Field(default=14, ge=1, alias="REGULAR_LOAN_PERIOD_DAYS")
    regular_late_fee_per_day: Decimal = Field(
        default=Decimal("0.50"), alias="REGULAR_LATE_FEE_PER_DAY"
    )

    student_max_items: int = Field(default=5, ge=0, alias="STUDENT_MAX_ITEMS")
    student_loan_period_days: int = Field(default=21, ge=1, alias="STUDENT_LOAN_PERIOD_DAYS")
    student_late_fee_per_day: Decimal = Field(
        default=Decimal("0.25"), alias="STUDENT_LATE_FEE_PER_DAY"
    )

    premium_max_items: int = Field(default=10, ge=0, alias="PREMIUM_MAX_ITEMS")
    premium_loan_period_days: int = Field(default=30, ge=1, alias="PREMIUM_LOAN_PERIOD_DAYS")
    premium_late_fee_per_day: Decimal = Field(
        default=Decimal("0.00"), alias="PREMIUM_LATE_FEE_PER_DAY"
    )

    # SMTP Configuration (optional; notifications are logged when unset)
    smtp_host: str | None = Field(default=None, alias="SMTP_HOST")
    smtp_port: int | None = Field(default=None, alias="SMTP_PORT")
    smtp_user: str | None = Field(default=None, alias="SMTP_USER")
    smtp_password: str | None = Field(default=None, alias="SMTP_PASSWORD")
    smtp_use_tls: bool = Field(default=True, alias="SMTP_USE_TLS")
    smtp_from_email: str | None = Field(default=None, alias="SMTP_FROM_EMAIL")

    @field_validator(
        "regular_late_fee_per_day",
        "student_late_fee_per_day",
        "premium_late_fee_per_day",
    )
    @classmethod
    def non_negative_rate(cls, v: Decimal) -> Decimal:
        """Late-fee rates can be zero but never negative."""
        if v < 0:
            raise ValueError("Late fee per day cannot be negative")
        return v

    @field_validator("smtp_host", "smtp_user", "smtp_password", "smtp_from_email", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("smtp_port", mode="before")
    @classmethod
    def empty_str_to_none_int(cls, v: str | int | None) -> int | None:
        """Convert empty strings to None for optional integer fields."""
        if v == "":
            return None
        if isinstance(v, str):
            try:
                return int(v)
            except ValueError:
                return None
        return v

    @property
    def smtp_configured(self) -> bool:
        return all(
            [
                self.smtp_host,
                self.smtp_port,
                self.smtp_user,
                self.smtp_password,
                self.smtp_from_email,
            ]
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
