"""
Unit tests for server configuration and startup.

Tests environment loading, validation, and initialization failures.
"""

import logging

import pytest

import sys
import os

# Add parent directory to path to import the server module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from radiofm_mcp.config import (
    DEFAULT_PLAYER_BASE_URL,
    DEFAULT_UPSTREAM_BASE_URL,
    ServerConfig,
)
from radiofm_mcp.server import initialize_server


ENV_VARS = ["HOST", "PORT", "RADIOFM_API_URL", "RADIOFM_PLAYER_URL", "LOG_LEVEL"]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all server environment variables."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestServerConfigFromEnvironment:
    """Test loading configuration from environment variables."""
    
    def test_defaults(self, clean_env):
        """Test that absent variables fall back to defaults."""
        config = ServerConfig.from_environment()
        
        assert config.host == "0.0.0.0"
        assert config.port == 3000
        assert config.upstream_base_url == DEFAULT_UPSTREAM_BASE_URL
        assert config.player_base_url == DEFAULT_PLAYER_BASE_URL
        assert config.log_level == "INFO"
    
    def test_port_from_environment(self, clean_env):
        """Test that PORT overrides the listening port."""
        clean_env.setenv("PORT", "8080")
        
        config = ServerConfig.from_environment()
        
        assert config.port == 8080
    
    def test_urls_lose_trailing_slash(self, clean_env):
        """Test that base URLs are normalized without trailing slash."""
        clean_env.setenv("RADIOFM_API_URL", "https://api.example.com/rfm/api/")
        clean_env.setenv("RADIOFM_PLAYER_URL", "https://player.example.com/play/")
        
        config = ServerConfig.from_environment()
        
        assert config.upstream_base_url == "https://api.example.com/rfm/api"
        assert config.player_base_url == "https://player.example.com/play"
    
    def test_non_numeric_port(self, clean_env):
        """Test that a non-numeric PORT is rejected."""
        clean_env.setenv("PORT", "not-a-port")
        
        with pytest.raises(ValueError, match="PORT"):
            ServerConfig.from_environment()
    
    def test_out_of_range_port(self, clean_env):
        """Test that an out-of-range PORT is rejected."""
        clean_env.setenv("PORT", "70000")
        
        with pytest.raises(ValueError, match="port"):
            ServerConfig.from_environment()


class TestServerConfigValidation:
    """Test validation of configuration values."""
    
    def test_valid_config(self):
        ServerConfig().validate()
    
    @pytest.mark.parametrize("port", [0, -1, 65536])
    def test_invalid_port(self, port):
        with pytest.raises(ValueError):
            ServerConfig(port=port).validate()
    
    def test_empty_upstream_url(self):
        with pytest.raises(ValueError, match="upstream_base_url"):
            ServerConfig(upstream_base_url="").validate()
    
    def test_empty_player_url(self):
        with pytest.raises(ValueError, match="player_base_url"):
            ServerConfig(player_base_url="").validate()


class TestInitializeServer:
    """Test server initialization."""
    
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        """Undo the logging configuration applied by initialize_server."""
        root_logger = logging.getLogger()
        handlers = root_logger.handlers[:]
        level = root_logger.level
        yield
        root_logger.handlers[:] = handlers
        root_logger.setLevel(level)
    
    def test_successful_initialization(self, clean_env):
        clean_env.setenv("PORT", "4000")
        clean_env.setenv("LOG_LEVEL", "DEBUG")
        
        config = initialize_server()
        
        assert config.port == 4000
        assert config.log_level == "DEBUG"
    
    def test_invalid_configuration_exits(self, clean_env):
        """Test that invalid configuration stops the server with exit code 1."""
        clean_env.setenv("PORT", "abc")
        
        with pytest.raises(SystemExit) as exc_info:
            initialize_server()
        
        assert exc_info.value.code == 1
