"""
Configuration Management for the Text Frequency Toolkit

Handles YAML-based configuration loading and validation.
"""

import copy
import logging
from typing import Dict, Any, Optional, Literal, Union
import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class DatasetSection(BaseModel):
    id_column: str = 'id'
    text_column: str = 'text'
    group_column: str = 'group'
    sheet_name: Optional[Union[str, int]] = None


class TokenizerSection(BaseModel):
    lowercase: bool = True
    pattern: Optional[str] = None


class StopwordsSection(BaseModel):
    source: str = Field('english', description="Bundled language name or word list path")
    mode: Literal['remove', 'keep', 'none'] = 'remove'


class FrequencySection(BaseModel):
    scale: float = Field(1_000_000, gt=0)
    top_n: int = Field(20, ge=0)


class ProjectionSection(BaseModel):
    n_components: int = Field(2, ge=1)
    scale: bool = False
    value: Literal['ipm', 'count'] = 'ipm'
    stopword_mode: Literal['remove', 'keep', 'none'] = 'keep'


class ConfigSchema(BaseModel):
    """Pydantic model for validation of the configuration dictionary."""
    dataset: DatasetSection = Field(default_factory=DatasetSection)
    tokenizer: TokenizerSection = Field(default_factory=TokenizerSection)
    stopwords: StopwordsSection = Field(default_factory=StopwordsSection)
    frequency: FrequencySection = Field(default_factory=FrequencySection)
    projection: ProjectionSection = Field(default_factory=ProjectionSection)


class PipelineConfig:
    """
    Configuration management.

    Parameters
    ----------
    config_dict : dict, optional
        Configuration dictionary
    """

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        self.config = config_dict or self._default_config()

    @classmethod
    def from_yaml(cls, path: str) -> 'PipelineConfig':
        """
        Load configuration from YAML file.

        Sections missing from the file take their default values.

        Parameters
        ----------
        path : str
            Path to YAML file

        Returns
        -------
        PipelineConfig
            Loaded configuration
        """
        try:
            with open(path, 'r') as f:
                config_dict = yaml.safe_load(f) or {}
        except OSError as e:
            raise ValueError(f"Could not read configuration {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration {path}: {e}") from e

        if not isinstance(config_dict, dict):
            raise ValueError(
                f"Configuration {path} must be a mapping of sections, got {type(config_dict).__name__}"
            )

        config = cls()
        config.update(config_dict)
        logger.info(f"Configuration loaded from {path}")
        return config

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'PipelineConfig':
        """
        Load configuration from dictionary, filling in defaults.

        Parameters
        ----------
        config : dict
            Configuration dictionary

        Returns
        -------
        PipelineConfig
            Loaded configuration
        """
        result = cls()
        result.update(config)
        return result

    def to_yaml(self, path: str) -> None:
        """
        Save configuration to YAML.

        Parameters
        ----------
        path : str
            Path to save YAML file
        """
        with open(path, 'w') as f:
            yaml.dump(self.config, f, default_flow_style=False)

        logger.info(f"Configuration saved to {path}")

    def update(self, overrides: Dict[str, Any]) -> None:
        """Merge a (possibly partial) configuration dictionary into this one."""
        for section, values in overrides.items():
            if isinstance(values, dict) and isinstance(self.config.get(section), dict):
                self.config[section].update(values)
            else:
                self.config[section] = values

    def validate(self) -> bool:
        """
        Validate configuration settings.

        Returns
        -------
        bool
            True if valid, raises ValueError if invalid
        """
        try:
            ConfigSchema.model_validate(self.config)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise ValueError(f"Configuration validation failed: {errors}") from e

        return True

    def _default_config(self) -> Dict[str, Any]:
        """Return default configuration."""
        return copy.deepcopy(ConfigSchema().model_dump())

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        keys = key.split('.')
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value
