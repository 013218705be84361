"""
Pytest configuration and fixtures for appgen tests.
"""

import itertools
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Keep the developer's environment out of the generator config
os.environ.pop("APPGEN_CONFIG", None)
os.environ.pop("APPGEN_GENERATED_BY", None)

from src.core.generator import ApplicationGenerator
from src.domain.models import NewAppInput


@pytest.fixture
def descriptor_dict():
    """A complete new-app descriptor using the wire (camelCase) names."""
    return {
        "name": "ruby-hello",
        "image": {
            "metadata": {"name": "sha256:abc"},
            "dockerImageMetadata": {
                "Config": {"ExposedPorts": {"9090": {}, "8080/tcp": {}}},
            },
        },
        "labels": {"team": "web"},
        "annotations": {},
        "buildConfig": {
            "sourceUrl": "https://github.com/openshift/ruby-hello-world.git",
            "envVars": {"RACK_ENV": "production", "BUNDLE_WITHOUT": "test"},
            "buildOnSourceChange": True,
            "buildOnImageChange": True,
            "buildOnConfigChange": True,
        },
        "deploymentConfig": {
            "envVars": {"PORT": "8080"},
            "deployOnNewImage": True,
            "deployOnConfigChange": True,
        },
        "scaling": {"replicas": 2},
        "routing": {"include": True},
        "namespace": "openshift",
        "imageName": "ruby",
        "imageTag": "2.2",
    }


@pytest.fixture
def app_input(descriptor_dict):
    return NewAppInput.model_validate(descriptor_dict)


@pytest.fixture
def mock_warn():
    """Collects diagnostics instead of printing them."""
    return MagicMock()


@pytest.fixture
def secret_source():
    """Deterministic, never-repeating secrets."""
    counter = itertools.count(1)
    return lambda: f"secret{next(counter):010d}"


@pytest.fixture
def generator(secret_source, mock_warn):
    return ApplicationGenerator(secret_source=secret_source, warn=mock_warn)
