#!/usr/bin/env python3

from __future__ import annotations
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProfileSettings(BaseSettings):
    """
    Where to load profiles from and which one is active.

    Values come from keyword arguments first, then environment variables. Both the
    AWS variable names and `PROFILESTORE_*` names are accepted. Nothing here is
    consulted implicitly; pass an instance to `load_profile_store`.
    """

    model_config = SettingsConfigDict(
        env_prefix="profilestore_",
        extra="ignore",
        populate_by_name=True,
    )

    credentials_file: Path | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "profilestore_credentials_file", "aws_shared_credentials_file"
        ),
    )
    config_file: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("profilestore_config_file", "aws_config_file"),
    )
    profile: str = Field(
        default="default",
        validation_alias=AliasChoices("profilestore_profile", "aws_profile"),
    )

    # Search ancestor directories case-insensitively for relative file paths.
    case_sensitive: bool = False
    # Render {{ env_var('VAR') }} templates in profile files.
    enable_env_vars: bool = True
