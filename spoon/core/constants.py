"""Constants used throughout spoon."""

from pathlib import Path


# Option defaults
DEFAULT_DOCKER_URL = "unix:///var/run/docker.sock"
DEFAULT_IMAGE = "spoon-pairing"
DEFAULT_PREFIX = "spoon-"
DEFAULT_BUILDDIR = Path(".")
DEFAULT_CONFIG_PATH = Path.home() / ".spoonrc"

# Container configuration
CONTAINER_ENTRYPOINT = "runit"
UNTAGGED_IMAGE_TAG = "<none>:<none>"

# SSH
SSH_USER = "pairing"
SSH_CONTAINER_PORT = "22"
SSH_PROTOCOL = "tcp"

# Timeout values
DESTROY_WAIT_TIMEOUT = 10  # seconds
PORT_PROBE_TIMEOUT = 5.0  # seconds
PORT_RETRY_INTERVAL = 0.25  # seconds
