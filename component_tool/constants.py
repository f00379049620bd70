"""Global constants for component-tool"""

from enum import Enum

APP_NAME = "component-tool"
LOG_FORMAT = "%(message)s"

# Application manifest
APP_MANIFEST_FILE = "component-app.yaml"

# User configuration
DEFAULT_CONFIG_DIR = "~/.component-tool"
DEFAULT_CONFIG_FILE = "config.yaml"
DEFAULT_PROFILE_NAME = "local"
DEFAULT_OSS_URL = "http://localhost:9881"
DEFAULT_CLOUD_URL = "https://release.api.golem.cloud"
DEFAULT_TIMEOUT = 60.0  # seconds

# Build related
DEFAULT_BUILD_DIR = "build"
LINKED_WASM_PATTERN = "{build_dir}/{component}.wasm"
IFS_ARCHIVE_NAME = "{component}-files.zip"
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1MB

# Dynamic linking
STUB_INTERFACE_PATTERN = "{namespace}:{name}-stub/stub-{name}"

# Remote API
API_PREFIX = "/v1"
WORKER_LIST_PAGE_SIZE = 50


class BackendType(Enum):
    OSS = "oss"
    CLOUD = "cloud"


class DependencyType(Enum):
    DYNAMIC_WASM_RPC = "dynamic-wasm-rpc"
    STATIC_WASM_RPC = "static-wasm-rpc"
    WASM = "wasm"


# Component selection modes
class ComponentSelectMode(Enum):
    ALL = "all"
    CURRENT_DIR = "current_dir"


# How a component name was matched against the application
class ComponentNameMatchKind(Enum):
    APP_CURRENT_DIR = "app_current_dir"
    APP = "app"
    UNKNOWN = "unknown"


# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "CT001"
    MANIFEST_FORMAT_ERROR = "CT002"
    MALFORMED_IDENTIFIER = "CT003"
    MISSING_SEGMENT = "CT004"
    INVALID_PACKAGE_NAME = "CT005"
    COMPONENT_NOT_FOUND = "CT010"
    VERSION_NOT_FOUND = "CT011"
    WORKER_NOT_FOUND = "CT012"
    APPLICATION_NOT_FOUND = "CT013"
    PROJECT_NOT_FOUND = "CT015"
    TEMPLATE_NOT_FOUND = "CT016"
    COMPONENT_EXISTS = "CT017"
    NO_COMPONENTS_SELECTED = "CT014"
    NOT_DEPLOYABLE = "CT020"
    BUILD_FAILED = "CT021"
    DEPENDENCY_NOT_BUILT = "CT022"
    ARTIFACT_OPEN_FAILED = "CT023"
    REMOTE_ERROR = "CT030"
    REMOTE_NOT_FOUND = "CT031"
    REMOTE_CONFLICT = "CT032"
    REMOTE_UNREACHABLE = "CT033"
    UNSUPPORTED_BY_BACKEND = "CT034"


# Environment variables
ENV_CONFIG_PATH = "COMPONENT_TOOL_CONFIG"
ENV_PROFILE = "COMPONENT_TOOL_PROFILE"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"

# Interactive prompts
PROMPT_CONFIRM_AUTO_DEPLOY = "Component {component} was not found. Deploy it now?"
PROMPT_CONFIRM_REDEPLOY = "Redeploying deletes and recreates every worker of the selected components. Continue?"

COMPONENT_NAME_HELP = """Accepted component name formats:
  <component>                      component in the default project
  <project>/<component>            component in a project of the current account
  <account>/<project>/<component>  component in a project of another account"""
