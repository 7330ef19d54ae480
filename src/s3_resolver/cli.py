"""
S3 Resolver CLI

Implements 3 CLI verbs over ObjectResolver:
- check: Verify an identifier resolves to a readable object
- format: Print the inferred source format
- fetch: Stream the object's bytes to a file
"""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Dict, List, Optional

import typer

from .cli_context import CLIContext
from .mappers import run_and_exit

app = typer.Typer(name="s3-resolver", help="Resolve identifiers to objects in S3-compatible storage")

CHUNK_SIZE = 1024 * 1024  # 1 MiB


def _parse_context(pairs: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse repeated KEY=VALUE options into a request context.
    
    Raises:
        ValueError: If an entry has no '=' or an empty key
    """
    context: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid context entry, expected KEY=VALUE: {pair}")
        context[key.strip()] = value
    return context


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Load settings from the environment once per invocation."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = run_and_exit(CLIContext.from_env)


@app.command()
def check(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., help="Identifier to resolve"),
    context: Optional[List[str]] = typer.Option(None, "--context", "-c", help="Request context as KEY=VALUE"),
) -> None:
    """Verify that the identifier resolves to a readable object."""
    cli_ctx: CLIContext = ctx.obj
    
    def _check():
        resolver = cli_ctx.resolver_for(identifier, _parse_context(context))
        resolver.check_access()
        return resolver.location()
    
    location = run_and_exit(_check)
    typer.echo(f"OK {location}")


@app.command("format")
def format_(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., help="Identifier to resolve"),
    context: Optional[List[str]] = typer.Option(None, "--context", "-c", help="Request context as KEY=VALUE"),
) -> None:
    """Print the source format of the identifier's object."""
    cli_ctx: CLIContext = ctx.obj
    
    def _format():
        resolver = cli_ctx.resolver_for(identifier, _parse_context(context))
        return resolver.resolve_format()
    
    fmt = run_and_exit(_format)
    typer.echo(f"{fmt.name} {fmt.preferred_media_type}")


@app.command()
def fetch(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., help="Identifier to resolve"),
    dest: Path = typer.Argument(..., help="File to write the object's bytes to"),
    context: Optional[List[str]] = typer.Option(None, "--context", "-c", help="Request context as KEY=VALUE"),
) -> None:
    """Stream the identifier's object to a file."""
    cli_ctx: CLIContext = ctx.obj
    
    def _fetch():
        resolver = cli_ctx.resolver_for(identifier, _parse_context(context))
        with resolver.open_stream() as source:
            stream = source.new_stream()
            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                with open(dest, "wb") as out:
                    shutil.copyfileobj(stream, out, CHUNK_SIZE)
            except Exception:
                # Never leave a partial file behind
                dest.unlink(missing_ok=True)
                raise
            finally:
                stream.close()
        return dest.stat().st_size
    
    size = run_and_exit(_fetch)
    typer.echo(f"Wrote {size} bytes to {dest}")


if __name__ == "__main__":
    app()
