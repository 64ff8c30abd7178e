import importlib
import importlib.util
import logging
from pathlib import Path
from typing import Optional, Type

import typer
import yaml

from strapkit import Form, configure_logging, get_config

logger = logging.getLogger(__name__)

DEFAULT_TARGET = "strapkit.demo:DemoForm"

# Create the main Typer application object
app = typer.Typer(
    name="strapkit",
    help="Render and preview strapkit forms.",
    add_completion=False
)


def load_form_class(target: str) -> Type[Form]:
    """
    Resolve ``module:Class`` (or ``path/to/file.py:Class``) to a `Form` subclass.
    """
    module_name, _, class_name = target.partition(":")
    if not class_name:
        raise typer.BadParameter(f"Expected module:Class, got '{target}'")
    if module_name.endswith(".py"):
        path = Path(module_name)
        if not path.exists():
            raise typer.BadParameter(f"File not found: {module_name}")
        spec = importlib.util.spec_from_file_location(path.stem, path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    else:
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            raise typer.BadParameter(f"Cannot import '{module_name}': {exc}") from exc
    form_class = getattr(module, class_name, None)
    if not (isinstance(form_class, type) and issubclass(form_class, Form)):
        raise typer.BadParameter(f"'{target}' is not a Form subclass")
    return form_class


def _setup(config_file: Optional[Path], verbose: bool) -> None:
    if config_file is not None:
        get_config().load_file(str(config_file))
    configure_logging("DEBUG" if verbose else None)


# --- CLI Commands ---

@app.command()
def render(
    target: str = typer.Argument(DEFAULT_TARGET, help="The form to render, as module:Class."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the page here instead of stdout."),
    config_file: Optional[Path] = typer.Option(None, "--config", help="YAML config file to load first."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log lifecycle steps."),
):
    """
    Renders a form's full page.
    """
    _setup(config_file, verbose)
    form = load_form_class(target).run()
    page = form.render()
    if output is None:
        typer.echo(page)
        return
    output.write_text(page, encoding="utf-8")
    typer.echo(f"✅ Wrote {target} to {output}")


@app.command()
def preview(
    target: str = typer.Argument(DEFAULT_TARGET, help="The form to preview, as module:Class."),
    width: int = typer.Option(1024, help="Window width."),
    height: int = typer.Option(768, help="Window height."),
    debug: bool = typer.Option(False, "--debug", help="Open the developer tools window."),
    config_file: Optional[Path] = typer.Option(None, "--config", help="YAML config file to load first."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log lifecycle steps."),
):
    """
    Opens a form in a desktop web view; events round trip through the form.
    """
    _setup(config_file, verbose)
    form = load_form_class(target).run()
    # Qt is only needed here
    from strapkit.window import preview as open_preview

    raise typer.Exit(code=open_preview(form, width=width, height=height, debug=debug))


@app.command(name="config")
def show_config(
    config_file: Optional[Path] = typer.Option(None, "--config", help="YAML config file to load first."),
):
    """
    Prints the resolved configuration and where it came from.
    """
    cfg = get_config()
    if config_file is not None:
        cfg.load_file(str(config_file))
    typer.echo(f"# source: {cfg.source or 'defaults'}")
    if cfg.resolved_config_path:
        typer.echo(f"# file: {cfg.resolved_config_path}")
    typer.echo(yaml.safe_dump(cfg.as_dict(), sort_keys=False).rstrip())


if __name__ == "__main__":
    app()
