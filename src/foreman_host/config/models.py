# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/foreman_host/config/models.py

from pydantic import BaseModel, Field, HttpUrl


class ForemanConfig(BaseModel):
    """
    Connection settings for one Foreman server.
    """
    server_url: HttpUrl          # e.g. https://foreman.example.com
    username: str
    password: str
    verify_tls: bool = True      # False for self-signed
    timeout_seconds: float = Field(default=30, gt=0)

    # Attempts for create/update/BMC calls; 0 still sends once
    retry_count: int = Field(default=3, ge=0)
    retry_delay_seconds: float = Field(default=0, ge=0)

    model_config = {
        "extra": "forbid",
    }

    def api_url(self) -> str:
        return f"{str(self.server_url).rstrip('/')}/api"
