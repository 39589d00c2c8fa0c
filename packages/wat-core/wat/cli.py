"""CLI — ask a chat completion endpoint what a file is."""

from __future__ import annotations

import logging
from typing import Optional

import typer

app = typer.Typer(name="wat", help="Ask an LLM what a file on disk is for.", add_completion=False)


@app.command()
def main(
    file_path: Optional[str] = typer.Argument(
        None, help="File path (or any text) to send as the user message"
    ),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model override"),
    show_config_path: bool = typer.Option(
        False, "--show-config-path", help="Print the config file location and exit"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Describe FILE_PATH using the configured chat completion endpoint."""
    from wat.errors import TextGenError
    from wat.llm import get_text_gen_client
    from wat.llm._config import get_config_path, load_config, resolve_settings
    from wat.models.messages import Message

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    if show_config_path:
        if file_path is not None or model is not None:
            raise typer.BadParameter(
                "cannot be combined with other arguments", param_hint="'--show-config-path'"
            )
        typer.echo(str(get_config_path()))
        return

    if file_path is None:
        raise typer.BadParameter("FILE_PATH is required", param_hint="'FILE_PATH'")

    try:
        settings = resolve_settings(load_config(), model=model)
        with get_text_gen_client(settings) as client:
            response = (
                client.chat_completions()
                .model(settings.model)
                .messages([Message.system(settings.prompt), Message.user(file_path)])
                .send()
            )
        typer.echo(response.content)
    except TextGenError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
