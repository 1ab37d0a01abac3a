# src/pu_pipeline/cli.py
import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer

from pu_pipeline.config import Settings
from pu_pipeline.executor import PulumiUp
from pu_pipeline.progress_log import LoggingProgressLog
from pu_pipeline.scaffold import simple_deployment
from pu_pipeline.stack import resolve_stack_name
from pu_pipeline.tree import WorkingTree
from pu_pipeline.types import ExecutionContext, INDEPENDENT, Repository, TransformSpec

app = typer.Typer(add_completion=False)
settings = Settings()

logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")


def _manifest_missing(settings: Settings):
    def predicate(ctx: ExecutionContext) -> bool:
        return not ctx.tree.has_file(settings.manifest_path)
    return predicate


# CLI

@app.command()
def up(
    path: Path = typer.Argument(..., exists=True, file_okay=False, help="Checked-out working tree"),
    repo: Optional[str] = typer.Option(None, "--repo", help="Repository name (defaults to the directory name)"),
    owner: str = typer.Option("local", "--owner"),
    env: str = typer.Option(INDEPENDENT, "--env", "-e", help="independent | staging | production | <n>-<suffix>"),
    token: Optional[str] = typer.Option(None, "--token", help="Access token (falls back to PU_PIPELINE_ACCESS_TOKEN)"),
    scaffold: bool = typer.Option(False, help="Add a simple Deployment stack when the tree has none"),
    image: Optional[str] = typer.Option(None, "--image", help="Container image for --scaffold"),
    namespace: str = typer.Option("default", "--namespace", help="Kubernetes namespace for --scaffold"),
    as_json: bool = typer.Option(False, "--json", help="Print the result payload as JSON"),
):
    tree = WorkingTree(path, name=repo)
    ctx = ExecutionContext(
        repo=Repository(owner=owner, name=tree.name),
        environment=env,
        tree=tree,
        log=LoggingProgressLog(),
        token=token,
        image=image,
    )
    transforms = []
    if scaffold:
        mutation = simple_deployment(namespace, settings.manifest_dir, settings.manifest_file)
        transforms.append(TransformSpec(mutation, predicate=_manifest_missing(settings)))

    result = asyncio.run(PulumiUp(settings).run(ctx, transforms))

    if as_json:
        typer.echo(json.dumps(result.to_payload(), indent=2))
    elif result.success:
        for u in result.external_urls:
            typer.secho(f"\n {u.label}: {u.url}", fg=typer.colors.GREEN)
    else:
        typer.secho(f"\n {result.description}", fg=typer.colors.RED)
    raise typer.Exit(code=result.code)


@app.command("stack-name")
def stack_name(
    repo: str = typer.Argument(...),
    env: str = typer.Argument(INDEPENDENT),
):
    typer.echo(resolve_stack_name(repo, env))


if __name__ == "__main__":
    app()
