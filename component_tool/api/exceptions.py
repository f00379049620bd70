"""Exception definitions for component-tool"""

from typing import List, Optional

from ..constants import ErrorCode


class ComponentToolError(Exception):
    """Base exception for component-tool"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class NonSuccessfulExit(ComponentToolError):
    """The failure was already reported to the user, only the exit code is left"""

    def __init__(self):
        super().__init__("Command failed")


class UserCancelledError(ComponentToolError):
    """User cancelled the operation"""

    def __init__(self):
        super().__init__("Operation cancelled by user")


class ConfigError(ComponentToolError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class ManifestError(ComponentToolError):
    """Application manifest error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.MANIFEST_FORMAT_ERROR)


class ParseError(ComponentToolError):
    """Component identifier could not be parsed"""
    pass


class MalformedIdentifierError(ParseError):
    """Component identifier has an unsupported number of segments"""

    def __init__(self, raw: str):
        super().__init__(f"Failed to parse component name: {raw}", ErrorCode.MALFORMED_IDENTIFIER)
        self.raw = raw


class MissingSegmentError(ParseError):
    """One of the component identifier segments is empty"""

    def __init__(self, kind: str):
        super().__init__(f"Missing {kind} part in component name!", ErrorCode.MISSING_SEGMENT)
        self.kind = kind


class InvalidPackageNameError(ComponentToolError):
    """Component package name is not `namespace:name`"""

    def __init__(self, raw: str):
        super().__init__(
            f"Invalid component package name: {raw}, expected <namespace>:<name> "
            "with lowercase letters, digits and dashes",
            ErrorCode.INVALID_PACKAGE_NAME
        )
        self.raw = raw


class NotFoundError(ComponentToolError):
    """Something requested does not exist"""
    pass


class ComponentNotFoundError(NotFoundError):
    """Component not found error"""

    def __init__(self, component_name: str, message: str = None):
        if message is None:
            message = f"Component not found: {component_name}"
        super().__init__(message, ErrorCode.COMPONENT_NOT_FOUND)
        self.component_name = component_name


class ComponentVersionNotFoundError(NotFoundError):
    """Requested component version does not exist"""

    def __init__(self, component_name: str, version: int,
                 available_versions: Optional[List[int]] = None):
        super().__init__(
            f"Component version not found: {component_name}@{version}",
            ErrorCode.VERSION_NOT_FOUND
        )
        self.component_name = component_name
        self.version = version
        self.available_versions = available_versions or []


class WorkerNotFoundError(NotFoundError):
    """Worker not found error"""

    def __init__(self, component_name: str, worker_name: str):
        super().__init__(
            f"Worker not found: {component_name}/{worker_name}",
            ErrorCode.WORKER_NOT_FOUND
        )
        self.component_name = component_name
        self.worker_name = worker_name


class TemplateNotFoundError(NotFoundError):
    """Unknown component template"""

    def __init__(self, template_name: str, available: Optional[List[str]] = None):
        message = f"Unknown component template: {template_name}"
        if available:
            message += f" (available: {', '.join(available)})"
        super().__init__(message, ErrorCode.TEMPLATE_NOT_FOUND)
        self.template_name = template_name


class ProjectNotFoundError(NotFoundError):
    """Cloud project not found error"""

    def __init__(self, project_name: str, account_id: Optional[str] = None):
        owner = f" of account {account_id}" if account_id else ""
        super().__init__(f"Project not found: {project_name}{owner}", ErrorCode.PROJECT_NOT_FOUND)
        self.project_name = project_name
        self.account_id = account_id


class ApplicationNotFoundError(NotFoundError):
    """No application manifest found"""

    def __init__(self, message: str = None):
        if message is None:
            message = (
                "No application found. Please ensure:\n"
                "1. You are in an application directory\n"
                "2. The application root contains component-app.yaml"
            )
        super().__init__(message, ErrorCode.APPLICATION_NOT_FOUND)


class NoComponentsSelectedError(ComponentToolError):
    """Neither the current directory nor the arguments selected a component"""

    def __init__(self):
        super().__init__(
            "No components were selected based on the current directory and no component "
            "was requested. Please specify a component name or switch to an application directory!",
            ErrorCode.NO_COMPONENTS_SELECTED
        )


class ComponentExistsError(ComponentToolError):
    """Component is already part of the application"""

    def __init__(self, component_name: str):
        super().__init__(f"Component {component_name} already exists", ErrorCode.COMPONENT_EXISTS)
        self.component_name = component_name


class NotDeployableError(ComponentToolError):
    """Component type cannot be deployed"""

    def __init__(self, component_name: str):
        super().__init__(f"Component {component_name} is not deployable", ErrorCode.NOT_DEPLOYABLE)
        self.component_name = component_name


class BuildError(ComponentToolError):
    """Build step failed"""

    def __init__(self, message: str, error_code: str = ErrorCode.BUILD_FAILED):
        super().__init__(message, error_code)


class DependencyNotBuiltError(BuildError):
    """A dependency has no build output yet"""

    def __init__(self, component_name: str, dependency_name: str):
        super().__init__(
            f"Dependency {dependency_name} of component {component_name} is not built yet",
            ErrorCode.DEPENDENCY_NOT_BUILT
        )
        self.component_name = component_name
        self.dependency_name = dependency_name


class RemoteError(ComponentToolError):
    """Remote control plane returned an error"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 response_body: str = "", error_code: str = ErrorCode.REMOTE_ERROR):
        super().__init__(message, error_code)
        self.status_code = status_code
        self.response_body = response_body


class RemoteNotFoundError(RemoteError):
    """Remote resource does not exist (HTTP 404)"""

    def __init__(self, message: str, response_body: str = ""):
        super().__init__(message, 404, response_body, ErrorCode.REMOTE_NOT_FOUND)


class RemoteConflictError(RemoteError):
    """Remote resource already exists or changed concurrently (HTTP 409)"""

    def __init__(self, message: str, response_body: str = ""):
        super().__init__(message, 409, response_body, ErrorCode.REMOTE_CONFLICT)


class RemoteRequestError(RemoteError):
    """Request never got a response"""

    def __init__(self, message: str):
        super().__init__(message, error_code=ErrorCode.REMOTE_UNREACHABLE)


class UnsupportedByBackendError(ComponentToolError):
    """Operation is not available on the selected backend"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.UNSUPPORTED_BY_BACKEND)
