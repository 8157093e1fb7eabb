"""Command-line interface for create-sweet."""

import logging
import sys
from pathlib import Path

import click

from create_sweet import __version__
from create_sweet.config.loader import (
    get_home_config_path,
    get_local_config_path,
    home_config_exists,
    load_config,
    local_config_exists,
    save_config,
)
from create_sweet.config.preflight import EnvironmentValidator
from create_sweet.config.schema import DEFAULT_CONFIG, SweetConfig
from create_sweet.config.wizard import ClickPrompter, print_config
from create_sweet.console import console
from create_sweet.editor import open_editor
from create_sweet.executors import CommandRunner, SubprocessRunner
from create_sweet.git import DEFAULT_COMMIT_MESSAGE, GitInitializer
from create_sweet.scaffold import (
    DependencyInstaller,
    HttpArchiveTransport,
    PipelineOptions,
    PipelineOrchestrator,
    PipelineResult,
    PipelineStatus,
    PromptCancelled,
    Prompter,
    TemplateFetcher,
    TemplateSource,
    render_summary,
)
from create_sweet.templates import DEFAULT_TEMPLATES, TemplateCatalog, format_size

logger = logging.getLogger(__name__)


def build_orchestrator(
    config: SweetConfig,
    runner: CommandRunner,
    prompter: Prompter,
    catalog: TemplateCatalog | None = None,
) -> PipelineOrchestrator:
    """Wire the pipeline stages from the effective configuration."""
    source = TemplateSource(
        provider=config.provider or "github",
        repository=config.repository or "",
        ref=config.ref or "main",
    )
    return PipelineOrchestrator(
        catalog=catalog or TemplateCatalog(DEFAULT_TEMPLATES),
        prompter=prompter,
        environment=EnvironmentValidator(runner, probe_timeout=config.probe_timeout),
        fetcher=TemplateFetcher(
            HttpArchiveTransport(timeout=config.fetch_timeout), source=source
        ),
        installer=DependencyInstaller(
            runner,
            package_manager=config.package_manager or "pnpm",
            timeout=config.install_timeout,
        ),
        git=GitInitializer(
            runner,
            commit_message=config.commit_message or DEFAULT_COMMIT_MESSAGE,
            timeout=config.git_timeout,
        ),
        options=PipelineOptions(
            check_environment=config.check_environment is not False,
            rewrite_metadata=config.rewrite_metadata is not False,
            install=config.install is not False,
            git=config.git is not False,
            cleanup_on_failure=config.cleanup_on_failure is not False,
        ),
    )


def _offer_editor(
    result: PipelineResult,
    config: SweetConfig,
    runner: CommandRunner,
    prompter: Prompter,
) -> None:
    """Open the project in the editor if configured or confirmed."""
    if result.context is None or config.open_editor is False:
        return
    if config.open_editor is None:
        try:
            if not prompter.confirm_open_editor():
                return
        except PromptCancelled:
            return
    open_editor(runner, result.context.target_directory, config.editor or "code")


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"create-sweet [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


def list_templates_callback(
    ctx: click.Context, _param: click.Parameter, value: bool
) -> None:
    """Print the available templates and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print("[bold]Available templates:[/bold]")
    for template in DEFAULT_TEMPLATES:
        size = ""
        if template.estimated_size_bytes:
            size = f" · {format_size(template.estimated_size_bytes)}"
        console.print(
            f"  [cyan]{template.id}[/cyan] - {template.label} "
            f"[dim]({template.hint}{size})[/dim]"
        )
        if template.requirements:
            needs = ", ".join(r.describe() for r in template.requirements)
            console.print(f"    [dim]Requires: {needs}[/dim]")
    ctx.exit()


@click.command()
@click.argument("project_name", required=False)
@click.option(
    "--template",
    "-t",
    "template_id",
    type=click.Choice([t.id for t in DEFAULT_TEMPLATES]),
    help="Starter template to use (prompted for when omitted).",
)
@click.option(
    "--ref",
    envvar="CREATE_SWEET_REF",
    help="Branch or tag of the template repository to fetch.",
)
@click.option(
    "--env-check/--no-env-check",
    default=True,
    help="Check for required tools before fetching (default: check).",
)
@click.option(
    "--install/--no-install",
    default=True,
    help="Install dependencies after fetching (default: install).",
)
@click.option(
    "--git/--no-git",
    default=True,
    help="Create a git repository with an initial commit (default: git).",
)
@click.option(
    "--editor/--no-editor",
    "open_editor_flag",
    default=None,
    help="Open the project in an editor afterwards (default: ask).",
)
@click.option(
    "--show-config",
    is_flag=True,
    help="Show the effective configuration and exit.",
)
@click.option(
    "--init-config",
    is_flag=True,
    help="Write the default configuration to ~/.create-sweet/config.yaml.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option(
    "--list-templates",
    is_flag=True,
    callback=list_templates_callback,
    expose_value=False,
    is_eager=True,
    help="List available templates and exit.",
)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.pass_context
def main(
    ctx: click.Context,
    project_name: str | None,
    template_id: str | None,
    ref: str | None,
    env_check: bool,
    install: bool,
    git: bool,
    open_editor_flag: bool | None,
    show_config: bool,
    init_config: bool,
    verbose: bool,
) -> None:
    """Create a new project from a Sweet Starter template."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr
        )

    if show_config:
        _show_config()
        return

    if init_config:
        _init_config()
        return

    config = load_config()

    def _from_cli(param_name: str) -> bool:
        """Check if a parameter was explicitly set on the command line."""
        source = ctx.get_parameter_source(param_name)
        return source in (
            click.core.ParameterSource.COMMANDLINE,
            click.core.ParameterSource.ENVIRONMENT,
        )

    # CLI values win over config only when given explicitly
    overrides = SweetConfig(
        ref=ref,
        check_environment=env_check if _from_cli("env_check") else None,
        install=install if _from_cli("install") else None,
        git=git if _from_cli("git") else None,
        open_editor=open_editor_flag,
    )
    config = config.merge(overrides)

    console.print(f"🚀  [cyan]Sweet Starter CLI v{__version__}[/cyan]\n")

    runner = SubprocessRunner()
    prompter = ClickPrompter()
    orchestrator = build_orchestrator(config, runner, prompter)

    try:
        result = orchestrator.run(
            Path.cwd(), template_id=template_id, project_name=project_name
        )
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)

    render_summary(result, package_manager=config.package_manager or "pnpm")

    if result.status == PipelineStatus.COMPLETED:
        _offer_editor(result, config, runner, prompter)
        console.print("\nHappy coding! 🎉")

    ctx.exit(result.exit_code)


def _show_config() -> None:
    """Display the effective configuration."""
    config = load_config()
    console.print(f"  [dim]Global: {get_home_config_path()}[/dim]")
    console.print(f"  [dim]Local: {get_local_config_path()}[/dim]")
    print_config(
        config.to_dict(),
        [
            ("Global config", home_config_exists()),
            ("Local config", local_config_exists()),
        ],
    )


def _init_config() -> None:
    """Write the default configuration to the global config path."""
    path = get_home_config_path()
    if home_config_exists():
        console.print(f"[yellow]Configuration already exists at {path}[/yellow]")
        return
    save_config(DEFAULT_CONFIG, path)
    console.print(f"[green]Configuration saved to {path}[/green]")
