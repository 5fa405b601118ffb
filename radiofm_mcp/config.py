"""Configuration management for the RadioFM MCP Server."""

import os
from dataclasses import dataclass


DEFAULT_UPSTREAM_BASE_URL = "https://devappradiofm.radiofm.co/rfm/api"
DEFAULT_PLAYER_BASE_URL = "https://appradiofm.com/radioplay"


@dataclass
class ServerConfig:
    """Configuration for the RadioFM MCP Server."""
    
    host: str = "0.0.0.0"
    port: int = 3000
    upstream_base_url: str = DEFAULT_UPSTREAM_BASE_URL  # RadioFM search API
    player_base_url: str = DEFAULT_PLAYER_BASE_URL  # used when an item has no deeplink
    log_level: str = "INFO"
    
    def validate(self) -> None:
        """
        Validate required configuration fields.
        
        Raises:
            ValueError: If required fields are missing or invalid
        """
        if not self.host:
            raise ValueError("host is required")
        
        if not 0 < self.port < 65536:
            raise ValueError("port must be between 1 and 65535")
        
        if not self.upstream_base_url:
            raise ValueError("upstream_base_url is required")
        
        if not self.player_base_url:
            raise ValueError("player_base_url is required")
    
    @classmethod
    def from_environment(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        try:
            port = int(os.getenv("PORT", "3000"))
        except ValueError as e:
            raise ValueError(f"PORT must be an integer: {os.getenv('PORT')}") from e
        
        config = cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=port,
            upstream_base_url=os.getenv(
                "RADIOFM_API_URL", DEFAULT_UPSTREAM_BASE_URL
            ).rstrip("/"),
            player_base_url=os.getenv(
                "RADIOFM_PLAYER_URL", DEFAULT_PLAYER_BASE_URL
            ).rstrip("/"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
        config.validate()
        return config
