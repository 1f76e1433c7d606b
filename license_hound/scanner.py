"""Scanner module: license resolution across many dependencies."""
import asyncio
import logging
from typing import Optional, Sequence

import httpx
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from license_hound.exceptions import LicenseHoundError, ScanError
from license_hound.models.conclusion import Conclusion
from license_hound.models.config import HoundConfig
from license_hound.models.dependency import Dependency
from license_hound.orchestrator import LicenseHound, aborted_conclusion
from license_hound.resolvers.http import HttpxGet

logger = logging.getLogger(__name__)

# Default bound on concurrent resolutions, keeps GitHub rate limits in reach
MAX_CONCURRENT_RESOLUTIONS = 10


async def resolve_conclusions(
    dependencies: Sequence[Dependency],
    hound: LicenseHound,
    concurrency: int = MAX_CONCURRENT_RESOLUTIONS,
    console: Optional[Console] = None,
    show_progress: bool = True,
) -> list[Conclusion]:
    """Resolve licenses for all dependencies with a bounded worker pool.

    Each dependency is resolved independently; its stages run in order
    while up to ``concurrency`` dependencies are in flight at once.

    Args:
        dependencies: Dependencies to resolve.
        hound: Resolver for a single dependency.
        concurrency: Maximum number of simultaneous resolutions.
        console: Optional Rich Console for progress display.
        show_progress: Whether to show progress indicator (default: True).

    Returns:
        One Conclusion per dependency, in input order regardless of
        completion order.

    Raises:
        ScanError: If concurrency is less than 1.

    Note:
        A LicenseHoundError aborting one resolution yields an Unresolved
        conclusion for that dependency only. Other exceptions are bugs
        and are re-raised.
    """
    if concurrency < 1:
        raise ScanError(f"Concurrency must be at least 1, got {concurrency}")

    semaphore = asyncio.Semaphore(concurrency)

    async def resolve_one(idx: int, dependency: Dependency) -> tuple[int, Conclusion]:
        async with semaphore:
            try:
                return (idx, await hound.resolve(dependency))
            except LicenseHoundError as e:
                logger.error(
                    "Resolution of %s@%s aborted: %s",
                    dependency.name,
                    dependency.version,
                    e,
                )
                return (idx, aborted_conclusion(dependency, e))

    resolved: list[Optional[Conclusion]] = [None] * len(dependencies)
    tasks = [resolve_one(i, dep) for i, dep in enumerate(dependencies)]

    if console is not None and show_progress and len(dependencies) > 0:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task_id = progress.add_task(
                f"Resolving licenses for {len(dependencies)} dependencies...",
                total=len(dependencies),
            )
            for coro in asyncio.as_completed(tasks):
                idx, conclusion = await coro
                resolved[idx] = conclusion
                progress.advance(task_id)
    else:
        for idx, conclusion in await asyncio.gather(*tasks):
            resolved[idx] = conclusion

    return [conclusion for conclusion in resolved if conclusion is not None]


async def scan_dependencies(
    dependencies: Sequence[Dependency],
    config: HoundConfig,
    console: Optional[Console] = None,
    show_progress: bool = True,
    client: Optional[httpx.AsyncClient] = None,
) -> list[Conclusion]:
    """Resolve licenses using GitHub over a shared HTTP client.

    Args:
        dependencies: Dependencies to resolve.
        config: Timeouts, concurrency, endpoints and credentials.
        console: Optional Rich Console for progress display.
        show_progress: Whether to show progress indicator.
        client: Optional httpx.AsyncClient; one is created when omitted.

    Returns:
        Conclusions in input order.
    """

    async def run(c: httpx.AsyncClient) -> list[Conclusion]:
        http_get = HttpxGet.from_config(c, config)
        if not http_get.authenticated:
            logger.info(
                "No GitHub credentials configured; API requests are rate limited"
            )
        hound = LicenseHound.from_config(http_get, config)
        return await resolve_conclusions(
            dependencies,
            hound,
            concurrency=config.concurrency,
            console=console,
            show_progress=show_progress,
        )

    if client is not None:
        return await run(client)

    async with httpx.AsyncClient(follow_redirects=True) as new_client:
        return await run(new_client)
