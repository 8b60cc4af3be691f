"""Configuration for the GitHub Checks client."""

from pydantic import BaseModel, SecretStr


class ChecksConfig(BaseModel):
    """Configuration for the GitHub Checks client."""

    token: SecretStr
    owner: str
    repo: str
    api_base_url: str = "https://api.github.com"
