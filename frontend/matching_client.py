"""
Client for the remote carbon-credit matching service.

This module loads the frontend configuration and wraps the single
``POST /api/v1/match_opportunities`` call made when the profile form is
submitted.
"""

import json
import os
import logging
from typing import Dict, Any, Optional

import requests

from models import ESGProfile, MatchResponse

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "config", "settings.json")
MATCH_ENDPOINT = "/api/v1/match_opportunities"

DEFAULT_CONFIG = {
    "MATCHING_API_BASE_URL": "http://localhost:8000",
    "REQUEST_TIMEOUT": None,
    "LOG_LEVEL": "INFO",
}


class MatchingServiceError(Exception):
    """Raised when the matching service cannot be reached or answers badly."""


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from settings.json, then apply environment overrides.

    Args:
        path: Settings file to read (defaults to config/settings.json)

    Returns:
        Configuration dictionary with defaults filled in
    """
    config = dict(DEFAULT_CONFIG)
    config_path = path or CONFIG_PATH
    try:
        with open(config_path, 'r') as f:
            config.update(json.load(f))
    except FileNotFoundError:
        logger.warning(f"Configuration file not found at {config_path}, using defaults")
    except json.JSONDecodeError:
        logger.warning(f"Invalid configuration file at {config_path}, using defaults")

    base_url = os.environ.get("MATCHING_API_BASE_URL")
    if base_url:
        config["MATCHING_API_BASE_URL"] = base_url

    level = config.get("LOG_LEVEL") or "INFO"
    try:
        logging.getLogger().setLevel(level)
    except (TypeError, ValueError):
        logger.warning(f"Unknown LOG_LEVEL {level!r}, using INFO")
        config["LOG_LEVEL"] = "INFO"
        logging.getLogger().setLevel("INFO")
    return config


class MatchingClient:
    """HTTP client for the matching service."""

    def __init__(self, base_url: str, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            base_url: Matching service base URL, e.g. http://localhost:8000
            timeout: Request timeout in seconds, None waits indefinitely
            session: Optional requests session to reuse
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MatchingClient":
        return cls(
            base_url=config.get("MATCHING_API_BASE_URL", DEFAULT_CONFIG["MATCHING_API_BASE_URL"]),
            timeout=config.get("REQUEST_TIMEOUT"),
        )

    @property
    def match_url(self) -> str:
        return f"{self.base_url}{MATCH_ENDPOINT}"

    def match_opportunities(self, profile: ESGProfile) -> MatchResponse:
        """
        Submit a profile and decode the ranked matches.

        Args:
            profile: Company ESG profile

        Returns:
            Decoded MatchResponse

        Raises:
            MatchingServiceError: On transport failure, non-2xx status or a
                body that is not valid JSON
        """
        logger.info(f"Requesting matches for {profile.company_name or 'unnamed company'} from {self.match_url}")
        try:
            response = self.session.post(self.match_url, json=profile.to_payload(), timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Matching request failed: {e}")
            raise MatchingServiceError(f"Matching request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Matching service returned invalid JSON: {e}")
            raise MatchingServiceError(f"Invalid response from matching service: {e}") from e

        if not isinstance(data, dict):
            logger.error(f"Unexpected response type from matching service: {type(data).__name__}")
            raise MatchingServiceError("Unexpected response from matching service")

        result = MatchResponse.from_dict(data)
        logger.info(f"Received {len(result.matches)} matches")
        return result
