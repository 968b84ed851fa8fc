"""Configuration persistence manager for the coloring page converter.

This module handles loading and saving of processing parameters to/from JSON files.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from errors import ParameterOutOfRange
from line_art.pipeline import normalize_parameters
from models import CONFIG_FILE, ProcessingParameters

logger = logging.getLogger(__name__)


class ConfigManager:
    """Handles loading and saving of processing parameters."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.coloring_page_config.json)
        """
        self.config_path = Path(config_path)

    def load(self) -> ProcessingParameters:
        """Load parameters from file, returning defaults if not found.

        Returns:
            ProcessingParameters with loaded (and clamped) or default values
        """
        params = ProcessingParameters()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                # Update parameters with loaded values (fallback to defaults)
                params.smooth = data.get("smooth", params.smooth)
                params.threshold = data.get("threshold", params.threshold)
                params.invert = data.get("invert", params.invert)
                params = normalize_parameters(params)
                logger.info("Loaded configuration from %s", self.config_path)
        except (OSError, ValueError, AttributeError) as e:
            # ParameterOutOfRange and JSONDecodeError are both ValueErrors
            logger.warning("Could not load config file: %s", e)
            params = ProcessingParameters()

        return params

    def save(self, params: ProcessingParameters) -> Tuple[bool, Optional[str]]:
        """Save parameters to file.

        Args:
            params: ProcessingParameters to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        try:
            params = normalize_parameters(params)
            with open(self.config_path, "w") as f:
                json.dump(asdict(params), f, indent=2)
            return True, None
        except (OSError, ParameterOutOfRange) as e:
            return False, str(e)
