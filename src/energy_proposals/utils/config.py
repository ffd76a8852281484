# src/energy_proposals/utils/config.py
"""
Runtime settings for proposal runs.

Values come from the environment or a project-level .env file.
Every field has a safe default so a bare checkout runs without setup.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Used when neither the customer record nor the address yields a state
    default_state: str = "VIC"

    # Battery sizing floors at the VPP minimum when this is on
    assume_vpp_participation: bool = True

    # Reference data (seed data is used when a path is not set)
    vpp_providers_path: Optional[Path] = None
    state_rebates_path: Optional[Path] = None

    # Exports
    output_root: Path = Path("output")
    report_retention_days: int = 30

    # Contact slide
    company_name: str = "Energy Proposals"
    consultant_name: str = "Energy Consultant"
    consultant_title: str = "Renewables Strategist & Designer"
    company_address: str = ""
    company_phone: str = ""
    company_email: str = ""
    company_website: str = ""


# Singleton
settings = AppSettings()
