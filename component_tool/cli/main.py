# component_tool/cli/main.py
"""Main CLI entry point for component-tool"""

import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..constants import APP_NAME, LOG_FORMAT
from ..clients import ClientFactory, ControlPlaneClient
from ..core import ApplicationContextHolder, load_application
from ..models.config import Profile
from ..services import AppService, ComponentService, ConfigService, DeployService, WorkerService
from ..utils.output import console
from .utils.interactive import confirm

# Import all commands
from .commands import component


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


class Context:
    """CLI context object with lazy configuration and application loading

    The configuration file and the application manifest are only read
    when a command asks for them.
    """

    def __init__(self):
        """Initialize CLI context"""
        self.verbose: bool = False
        self.debug: bool = False
        self.yes: bool = False
        self.profile_name: Optional[str] = None
        self.build_profile: Optional[str] = None
        self.config_path: Optional[Path] = None
        self._config_service: Optional[ConfigService] = None
        self._app_holder: Optional[ApplicationContextHolder] = None

    @property
    def config_service(self) -> ConfigService:
        if self._config_service is None:
            self._config_service = ConfigService(self.config_path)
        return self._config_service

    @property
    def profile(self) -> Profile:
        """Get the active connection profile

        Raises:
            ConfigError: If the configuration or the profile is invalid
        """
        return self.config_service.get_profile(self.profile_name)

    @property
    def app_holder(self) -> ApplicationContextHolder:
        """Get the application context holder (lazy loading)

        Outside of an application the holder is empty.
        """
        if self._app_holder is None:
            app_ctx = load_application(build_profile=self.build_profile)
            if self.debug:
                if app_ctx is not None:
                    console.print(f"[dim]Application root: {app_ctx.root}[/dim]")
                else:
                    console.print("[dim]No application found in current directory tree[/dim]")
            self._app_holder = ApplicationContextHolder(app_ctx)
        return self._app_holder

    def confirm(self, message: str) -> bool:
        return confirm(message, assume_yes=self.yes)

    def create_client(self) -> ControlPlaneClient:
        """Create the control plane client of the active profile"""
        profile = self.profile
        if self.debug:
            console.print(f"[dim]Using profile: {profile.get_display_info()}[/dim]")
        return ClientFactory.create_from_profile(profile)

    def app_service(self) -> AppService:
        """Application service for commands that stay local"""
        return AppService(self.app_holder, build_profile=self.build_profile)

    def deploy_service(self, client: ControlPlaneClient) -> DeployService:
        return DeployService(
            client,
            self.app_holder,
            WorkerService(client),
            build_profile=self.build_profile,
        )

    def component_service(self, client: ControlPlaneClient) -> ComponentService:
        deploy_service = self.deploy_service(client)
        return ComponentService(
            client,
            self.app_holder,
            deploy_service,
            deploy_service.worker_service,
            default_project=self.profile.default_project,
            confirm=self.confirm,
        )


@click.group(name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.option('--profile', 'profile_name', help='Connection profile to use')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Configuration file')
@click.option('--build-profile', help='Build profile of the application manifest')
@click.option('-y', '--yes', is_flag=True, help='Answer yes to every confirmation')
@click.pass_context
def cli(ctx, verbose, debug, quiet, profile_name, config_path, build_profile, yes):
    """Component Tool - Build and deploy WebAssembly components

    This tool builds the components of an application, uploads them to
    the control plane and rolls out the new versions to running workers.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    # Create context with lazy initialization
    ctx.obj = Context()
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.yes = yes
    ctx.obj.profile_name = profile_name
    ctx.obj.config_path = config_path
    ctx.obj.build_profile = build_profile


# Register commands
cli.add_command(component.component)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Auto-help for incomplete commands
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        # Handle help for incomplete commands
        if len(sys.argv) == 2 and sys.argv[1] not in [
            '-h', '--help', '-v', '--verbose', '-d', '--debug', '-q', '--quiet'
        ]:
            # If only command name provided, show its help
            sys.argv.append('--help')

        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
