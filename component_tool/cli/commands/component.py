"""Component management command"""

import sys
from typing import NoReturn

import click

from ...api.exceptions import (
    ComponentExistsError,
    ComponentToolError,
    ComponentVersionNotFoundError,
    NonSuccessfulExit,
    ParseError,
)
from ...constants import COMPONENT_NAME_HELP, ComponentSelectMode, PROMPT_CONFIRM_REDEPLOY
from ...models.worker import WorkerUpdateMode
from ...templates import list_templates
from ...utils.async_utils import run_async
from ...utils.output import console, log_error
from ..utils.interactive import confirm_or_cancel
from ..utils.output import (
    format_component_details,
    format_component_list,
    format_deploy_result,
    format_diagnostics,
    format_redeploy_results,
    format_templates,
    format_update_result,
    format_worker_metadata,
)

UPDATE_MODE_CHOICE = click.Choice([m.value for m in WorkerUpdateMode])


def _exit_with_error(ctx, error: Exception) -> NoReturn:
    """Report a failed command and exit with status 1"""
    if isinstance(error, NonSuccessfulExit):
        sys.exit(1)

    console.print(f"[red]Error: {error}[/red]")

    if isinstance(error, ParseError):
        console.print(COMPONENT_NAME_HELP)

    if isinstance(error, ComponentVersionNotFoundError) and error.available_versions:
        console.print("Available component versions:")
        for version in error.available_versions:
            console.print(f"  • {version}")

    if ctx.obj.debug and not isinstance(error, ComponentToolError):
        console.print_exception()
    sys.exit(1)


def _select_mode(component_names) -> ComponentSelectMode:
    return ComponentSelectMode.CURRENT_DIR if not component_names else ComponentSelectMode.ALL


@click.group()
@click.pass_context
def component(ctx):
    """Build, deploy and query components

    Component names are accepted as COMPONENT, PROJECT/COMPONENT or
    ACCOUNT/PROJECT/COMPONENT. Without a name the components of the
    current application directory are selected.
    """
    pass


@component.command()
@click.argument('template')
@click.argument('package_name')
@click.pass_context
def new(ctx, template, package_name):
    """Add a new component to the application from a template

    PACKAGE_NAME is the `namespace:name` of the new component.

    Examples:
        component-tool component new rust ns:billing
    """
    async def _new():
        app_service = ctx.obj.app_service()
        source_dir = await app_service.new_component(template, package_name)
        async with app_service.app_holder.read() as app_ctx:
            return source_dir, app_ctx.component_names()

    try:
        source_dir, component_names = run_async(_new())
    except ComponentExistsError as e:
        log_error(str(e))
        _exit_with_error(ctx, NonSuccessfulExit())
    except Exception as e:
        _exit_with_error(ctx, e)

    console.print(f"\nSources: {source_dir}")
    console.print("Application components:")
    for name in component_names:
        console.print(f"  • {name}")
    console.print(f"\nNext: component-tool component build {package_name}")


@component.command()
@click.argument('filter_text', required=False)
def templates(filter_text):
    """List component templates, optionally filtered by language or name"""
    format_templates(list_templates(filter_text))


@component.command()
@click.argument('component_names', nargs=-1)
@click.option('--force-build', is_flag=True, help='Build even if artifacts are up to date')
@click.pass_context
def build(ctx, component_names, force_build):
    """Build components of the application

    Examples:
        # Build the components of the current directory
        component-tool component build

        # Rebuild one component
        component-tool component build ns:orders --force-build
    """
    async def _build():
        return await ctx.obj.app_service().build(
            list(component_names), force_build, _select_mode(component_names)
        )

    try:
        run_async(_build())
    except Exception as e:
        _exit_with_error(ctx, e)


@component.command()
@click.argument('component_names', nargs=-1)
@click.pass_context
def clean(ctx, component_names):
    """Remove build outputs of components"""
    async def _clean():
        return await ctx.obj.app_service().clean(
            list(component_names), _select_mode(component_names)
        )

    try:
        run_async(_clean())
    except Exception as e:
        _exit_with_error(ctx, e)


@component.command()
@click.argument('component_names', nargs=-1)
@click.pass_context
def diagnose(ctx, component_names):
    """Check sources, build tools, dependencies and artifacts of components

    Exits with status 1 if any check fails.
    """
    async def _diagnose():
        return await ctx.obj.app_service().diagnose(
            list(component_names), _select_mode(component_names)
        )

    try:
        results = run_async(_diagnose())
    except Exception as e:
        _exit_with_error(ctx, e)

    format_diagnostics(results)

    failed = [r for r in results if not r.passed]
    if failed:
        console.print(f"\n[red]{len(failed)} check(s) failed[/red]")
        sys.exit(1)
    console.print("\n[green]All checks passed![/green]")


@component.command()
@click.argument('component_names', nargs=-1)
@click.option('--force-build', is_flag=True, help='Build even if artifacts are up to date')
@click.option('--update-workers', 'update_mode', type=UPDATE_MODE_CHOICE,
              help='Update existing workers to the new versions with this mode')
@click.option('--redeploy-workers', 'redeploy', is_flag=True,
              help='Delete and recreate existing workers after deploying')
@click.pass_context
def deploy(ctx, component_names, force_build, update_mode, redeploy):
    """Build and deploy components

    Components not yet known by the control plane are created, known ones
    get a new version.

    Examples:
        # Deploy the components of the current directory
        component-tool component deploy

        # Deploy and update running workers automatically
        component-tool component deploy ns:orders --update-workers auto
    """
    mode = WorkerUpdateMode(update_mode) if update_mode else None

    async def _deploy():
        async with ctx.obj.create_client() as client:
            component_service = ctx.obj.component_service(client)
            project = await component_service.resolve_project(None, None)
            return await component_service.deploy_service.deploy(
                project,
                list(component_names),
                force_build=force_build,
                select_mode=_select_mode(component_names),
                update_mode=mode,
                redeploy=redeploy,
            )

    try:
        if redeploy and mode is None:
            confirm_or_cancel(PROMPT_CONFIRM_REDEPLOY, ctx.obj.yes)

        result = run_async(_deploy())
        format_deploy_result(result)

        if result.update_results is not None and result.update_results.has_failures:
            sys.exit(1)
    except Exception as e:
        _exit_with_error(ctx, e)


@component.command(name='list')
@click.argument('component_name', required=False)
@click.pass_context
def list_components(ctx, component_name):
    """List every version of components

    Examples:
        # List all components
        component-tool component list

        # List the versions of one component
        component-tool component list my-project/ns:orders
    """
    async def _list():
        async with ctx.obj.create_client() as client:
            return await ctx.obj.component_service(client).list_components(component_name)

    try:
        components = run_async(_list())
        if not components:
            console.print("[yellow]No components found[/yellow]")
            return
        format_component_list(components)
    except Exception as e:
        _exit_with_error(ctx, e)


@component.command()
@click.argument('component_name', required=False)
@click.option('--version', 'version', type=int, help='Component version, latest by default')
@click.pass_context
def get(ctx, component_name, version):
    """Show the latest or a specific version of components"""
    async def _get():
        async with ctx.obj.create_client() as client:
            return await ctx.obj.component_service(client).get_components(component_name, version)

    try:
        for found in run_async(_get()):
            format_component_details(found)
    except Exception as e:
        _exit_with_error(ctx, e)


@component.command(name='update-workers')
@click.argument('component_name', required=False)
@click.option('--update-mode', 'update_mode', type=UPDATE_MODE_CHOICE,
              default=WorkerUpdateMode.AUTOMATIC.value, show_default=True,
              help='Worker update mode')
@click.pass_context
def update_workers(ctx, component_name, update_mode):
    """Update workers to the latest component versions"""
    async def _update():
        async with ctx.obj.create_client() as client:
            return await ctx.obj.component_service(client).update_workers(
                component_name, WorkerUpdateMode(update_mode)
            )

    try:
        result = run_async(_update())
        format_update_result(result)
        if result.has_failures:
            sys.exit(1)
    except Exception as e:
        _exit_with_error(ctx, e)


@component.command(name='redeploy-workers')
@click.argument('component_name', required=False)
@click.pass_context
def redeploy_workers(ctx, component_name):
    """Delete and recreate workers with the latest component versions"""
    async def _redeploy():
        async with ctx.obj.create_client() as client:
            return await ctx.obj.component_service(client).redeploy_workers(component_name)

    try:
        confirm_or_cancel(PROMPT_CONFIRM_REDEPLOY, ctx.obj.yes)
        format_redeploy_results(run_async(_redeploy()))
    except Exception as e:
        _exit_with_error(ctx, e)


@component.command(name='get-worker')
@click.argument('component_name')
@click.argument('worker_name')
@click.pass_context
def get_worker(ctx, component_name, worker_name):
    """Show worker metadata

    Application components that are not deployed yet are deployed first,
    after confirmation.
    """
    async def _get_worker():
        async with ctx.obj.create_client() as client:
            return await ctx.obj.component_service(client).worker_metadata(component_name, worker_name)

    try:
        format_worker_metadata(run_async(_get_worker()))
    except Exception as e:
        _exit_with_error(ctx, e)
