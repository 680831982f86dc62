import asyncio
from typing import Any, Awaitable, Callable, Generic, Iterable, Protocol, Sequence, TypeVar

from tqdm import tqdm

from src.config.logger_config import logger
from src.scraper.domain.models import EnrichmentOutcome, EnrichmentResult


class UrlKeyed(Protocol):
    url: str


T = TypeVar("T")
R = TypeVar("R", bound=UrlKeyed)
S = TypeVar("S")


class EnrichmentPipeline(Generic[R, S]):
    """Fan out primary and secondary page loads and join them by URL key.

    ``concurrency_limit`` bounds the primary loads and
    ``secondary_concurrency_limit`` (defaulting to the same value) the
    secondary ones; ``0`` or ``None`` means one task per key with no bound.
    """

    def __init__(
        self,
        concurrency_limit: int | None = 0,
        secondary_concurrency_limit: int | None = None,
        show_progress: bool = False,
        name: str = "enrichment",
    ) -> None:
        self.concurrency_limit = concurrency_limit or 0
        self.secondary_concurrency_limit = (
            self.concurrency_limit if secondary_concurrency_limit is None else secondary_concurrency_limit or 0
        )
        self.show_progress = show_progress
        self.name = name

    async def fan_out(
        self,
        keys: Iterable[str],
        task: Callable[[str], Awaitable[T]],
        limit: int | None = None,
        desc: str | None = None,
    ) -> list[EnrichmentResult[T]]:
        """Run ``task`` once per key; results come back in completion order.

        With a limit, a semaphore slot is taken before each task is spawned
        and given back when the task finishes.
        """
        keys = list(keys)
        limit = self.concurrency_limit if limit is None else limit
        semaphore = asyncio.Semaphore(limit) if limit and limit > 0 else None

        jobs: list[asyncio.Task[EnrichmentResult[T]]] = []
        for key in keys:
            if semaphore is not None:
                await semaphore.acquire()
            job = asyncio.create_task(self._run_task(key, task))
            if semaphore is not None:
                job.add_done_callback(lambda _job: semaphore.release())
            jobs.append(job)

        results: list[EnrichmentResult[T]] = []
        with tqdm(
            total=len(jobs),
            desc=desc or self.name,
            unit=" page",
            leave=True,
            disable=not self.show_progress,
        ) as progress:
            for next_done in asyncio.as_completed(jobs):
                results.append(await next_done)
                progress.update(1)
        return results

    @staticmethod
    async def _run_task(key: str, task: Callable[[str], Awaitable[T]]) -> EnrichmentResult[T]:
        try:
            return EnrichmentResult(key=key, value=await task(key))
        except Exception as exc:
            return EnrichmentResult(key=key, error=exc)

    async def run(
        self,
        primary_keys: Sequence[str],
        load_primary: Callable[[str], Awaitable[Sequence[R]]],
        secondary_links: Callable[[R], Iterable[str]] | None = None,
        load_secondary: Callable[[str], Awaitable[S]] | None = None,
        merge: Callable[[R, S], Any] | None = None,
    ) -> EnrichmentOutcome[R, S]:
        failures: list[tuple[str, Exception]] = []
        records: dict[str, R] = {}

        # A leaf reachable from two categories is loaded once.
        unique_keys = list(dict.fromkeys(primary_keys))
        position = {key: i for i, key in enumerate(unique_keys)}
        primary_results = await self.fan_out(
            unique_keys,
            load_primary,
            limit=self.concurrency_limit,
            desc=f"{self.name} primary",
        )
        for result in sorted(primary_results, key=lambda r: position[r.key]):
            if not result.ok:
                logger.error("Dropping primary page {}: {}", result.key, result.error)
                failures.append((result.key, result.error))
                continue
            for record in result.value:
                records.setdefault(record.url, record)

        secondaries: dict[str, S] = {}
        if secondary_links is not None and load_secondary is not None:
            owners: dict[str, list[str]] = {}
            for url in sorted(records):
                for link in secondary_links(records[url]):
                    owners.setdefault(link, []).append(url)

            logger.info("{}: {} records, fetching {} secondary pages", self.name, len(records), len(owners))
            secondary_results = await self.fan_out(
                owners,
                load_secondary,
                limit=self.secondary_concurrency_limit,
                desc=f"{self.name} secondary",
            )
            for result in sorted(secondary_results, key=lambda r: r.key):
                if not result.ok:
                    logger.warning("Secondary page {} failed, keeping defaults: {}", result.key, result.error)
                    failures.append((result.key, result.error))
                    continue
                secondaries[result.key] = result.value
                if merge is not None:
                    for owner in owners[result.key]:
                        merge(records[owner], result.value)

        return EnrichmentOutcome(
            records=sorted(records.values(), key=lambda r: r.url),
            secondaries=secondaries,
            failures=failures,
        )
