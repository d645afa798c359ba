"""CLI for Newsreel."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, field_validator

from newsreel.cache import DiskImageCache
from newsreel.client import NewsAPIClient
from newsreel.config import create_from_config, get_default_config_path, load_config
from newsreel.data import Phase
from newsreel.screens import CredentialEntry, Results, submit_credentials
from newsreel.state import ResultStateMachine

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    query: str = ""
    config: Path
    sources: list[str] = []
    api_key: str | None = None
    list_sources: bool = False

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


async def run(args: CLIArgs) -> int:
    """Run one search, wait for every image, and log the results.

    Args:
        args: Validated CLI arguments.

    Returns:
        Process exit code.
    """
    config = load_config(args.config)
    logging.getLogger().setLevel(config.logging.level)
    resources: list[NewsAPIClient | DiskImageCache] = []

    def build(api_key: str) -> ResultStateMachine:
        client, cache, machine = create_from_config(config, api_key=api_key or None)
        resources.extend([cache, client])
        return machine

    screen = CredentialEntry.from_env()
    if args.api_key:
        screen = CredentialEntry(api_key=args.api_key)
    screen, initial_load = submit_credentials(screen, build)
    if not isinstance(screen, Results) or initial_load is None:
        logger.error(getattr(screen, "error", "Invalid credentials"))
        return 1

    machine = screen.machine
    try:
        if args.list_sources:
            initial_load.close()
            await machine.refresh_sources()
            for source in machine.sources.visible_sources():
                logger.info(f"{source.id:<32} {source.name}")
            return 0

        # The initial load reads the query and sources when it starts running
        for source_id in args.sources:
            machine.toggle_source(source_id, True)
        machine.set_query(args.query)

        tasks = await initial_load
        await asyncio.gather(*tasks)

        snapshot = machine.snapshot()
        if snapshot.phase is Phase.LOADED_ERR:
            logger.error(snapshot.error)
            return 1

        articles = snapshot.listing.articles if snapshot.listing is not None else ()
        logger.info(f"\nFound {len(articles)} articles:\n")
        for i, article in enumerate(articles, 1):
            image = machine.image_slots[i - 1]
            logger.info(f"{i}. {article.title}")
            logger.info(f"   Source: {article.source.name or article.source.id or 'Unknown'}")
            if article.url:
                logger.info(f"   URL: {article.url}")
            if image is not None:
                logger.info(f"   Image: {image.format} ({len(image)} bytes)")
            elif article.url_to_image:
                logger.info("   Image: unavailable")

        logger.info(f"\nImages loaded: {snapshot.loaded_image_count}/{len(snapshot.image_slots)}")
        return 0
    finally:
        for resource in resources:
            await resource.aclose()


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Search NewsAPI and cache article images.")
    parser.add_argument(
        "query",
        nargs="?",
        default="",
        help="Search query (omit for top headlines)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--source",
        "-s",
        action="append",
        default=[],
        dest="sources",
        help="Restrict results to a source id (repeatable)",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="NewsAPI key (default: NEWS_API_TOKEN env var)",
    )
    parser.add_argument(
        "--list-sources",
        action="store_true",
        default=False,
        help="List available source ids and exit",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            query=ns.query,
            config=config_path,
            sources=ns.sources,
            api_key=ns.api_key,
            list_sources=ns.list_sources,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
