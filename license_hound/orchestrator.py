"""License resolution for a single dependency.

Resolution is a small state machine::

    Start -> LocalSearch -> OracleQuery -> RemoteSearch -> {Resolved, Unresolved}

Each search state runs one stage and reports a StageResult; the pure
``next_state`` function decides where to go next. Every attempt made by a
stage is recorded as Evidence, whether it succeeded or not.
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Optional

from license_hound.analysis.attribution import recover_copyright_notice
from license_hound.analysis.classifier import classify, decode_content
from license_hound.analysis.filenames import (
    match_license_filenames,
    remote_candidates,
)
from license_hound.exceptions import LicenseHoundError, NetworkError
from license_hound.models.conclusion import (
    Conclusion,
    Evidence,
    EvidenceOutcome,
    EvidenceSource,
    ResolutionState,
)
from license_hound.models.config import HoundConfig
from license_hound.models.dependency import Dependency, RepositoryId
from license_hound.models.license import LicenseFamily
from license_hound.resolvers.fetcher import FetchStatus, GitHubFileFetcher
from license_hound.resolvers.http import HttpGet
from license_hound.resolvers.local import (
    ListDirectory,
    ReadFile,
    list_directory,
    read_file,
)
from license_hound.resolvers.oracle import GitHubLicenseOracle, OracleStatus

logger = logging.getLogger(__name__)


class StageResult(str, Enum):
    """How a search stage ended."""

    SUCCESS = "success"
    FAILURE = "failure"
    FATAL = "fatal"


def next_state(
    state: ResolutionState, result: StageResult, has_repository: bool
) -> ResolutionState:
    """Transition function of the resolution state machine.

    Args:
        state: Current, non-terminal state.
        result: Outcome of the stage run in that state (ignored for Start).
        has_repository: Whether the dependency has a usable remote repository.

    Returns:
        The state to move to.

    Raises:
        ValueError: If called with a terminal state.
    """
    if state == ResolutionState.START:
        return ResolutionState.LOCAL_SEARCH

    if state == ResolutionState.LOCAL_SEARCH:
        if result == StageResult.SUCCESS:
            return ResolutionState.RESOLVED
        if result == StageResult.FAILURE and has_repository:
            return ResolutionState.ORACLE_QUERY
        return ResolutionState.UNRESOLVED

    if state == ResolutionState.ORACLE_QUERY:
        if result == StageResult.SUCCESS:
            return ResolutionState.RESOLVED
        return ResolutionState.REMOTE_SEARCH

    if state == ResolutionState.REMOTE_SEARCH:
        if result == StageResult.SUCCESS:
            return ResolutionState.RESOLVED
        return ResolutionState.UNRESOLVED

    raise ValueError(f"No transition out of terminal state {state.value}")


OUTCOME_BY_FETCH_STATUS = {
    FetchStatus.NOT_FOUND: EvidenceOutcome.NOT_FOUND,
    FetchStatus.RATE_LIMITED: EvidenceOutcome.RATE_LIMITED,
    FetchStatus.NETWORK_ERROR: EvidenceOutcome.NETWORK_ERROR,
}

OUTCOME_BY_ORACLE_STATUS = {
    OracleStatus.NO_METADATA: EvidenceOutcome.NO_METADATA,
    OracleStatus.RATE_LIMITED: EvidenceOutcome.RATE_LIMITED,
    OracleStatus.NETWORK_ERROR: EvidenceOutcome.NETWORK_ERROR,
}


class _Resolution:
    """Working state of one dependency's resolution.

    Created per call to LicenseHound.resolve and never shared, so
    concurrent resolutions cannot see each other's evidence.
    """

    def __init__(self, dependency: Dependency) -> None:
        self.dependency = dependency
        self.repository: Optional[RepositoryId] = dependency.repository_id
        self.evidence: list[Evidence] = []
        self.stage = ResolutionState.START
        self.license: Optional[LicenseFamily] = None
        self.source_locator: Optional[str] = None
        self.license_text: Optional[bytes] = None

    def require_repository(self) -> RepositoryId:
        """Repository for the network stages, which only run when one exists."""
        if self.repository is None:
            raise ValueError(
                f"{self.dependency.name}@{self.dependency.version} has no "
                "repository to query"
            )
        return self.repository

    def record(self, evidence: Evidence) -> Evidence:
        self.evidence.append(evidence)
        return evidence

    def accept(
        self, family: LicenseFamily, locator: str, content: Optional[bytes]
    ) -> None:
        self.license = family
        self.source_locator = locator
        self.license_text = content

    def conclude(self) -> Conclusion:
        copyright_notice = None
        if self.license_text:
            copyright_notice = recover_copyright_notice(
                decode_content(self.license_text)
            )
        return Conclusion(
            name=self.dependency.name,
            version=self.dependency.version,
            repository=self.dependency.repository,
            license=self.license,
            evidence=tuple(self.evidence),
            terminal_stage=self.stage,
            source_locator=self.source_locator,
            copyright_notice=copyright_notice,
        )


class LicenseHound:
    """Resolves the license of one dependency at a time.

    Stages run strictly in order: local license files, the provider's
    license metadata, then license files fetched from the repository.
    A local match always wins; the network is only consulted after the
    local search failed and only if the dependency names a repository.
    """

    def __init__(
        self,
        oracle: GitHubLicenseOracle,
        fetcher: GitHubFileFetcher,
        list_dir: ListDirectory = list_directory,
        read: ReadFile = read_file,
    ) -> None:
        """Initialize with the remote resolvers and local file primitives.

        Args:
            oracle: License metadata oracle used in the OracleQuery stage.
            fetcher: File fetcher used in the RemoteSearch stage.
            list_dir: Directory listing primitive.
            read: File reading primitive.
        """
        self._oracle = oracle
        self._fetcher = fetcher
        self._list_dir = list_dir
        self._read = read
        self._stages: dict[
            ResolutionState, Callable[[_Resolution], Awaitable[StageResult]]
        ] = {
            ResolutionState.LOCAL_SEARCH: self._local_search,
            ResolutionState.ORACLE_QUERY: self._oracle_query,
            ResolutionState.REMOTE_SEARCH: self._remote_search,
        }

    @classmethod
    def from_config(cls, http_get: HttpGet, config: HoundConfig) -> "LicenseHound":
        """Build a LicenseHound whose resolvers share one HTTP capability."""
        oracle = GitHubLicenseOracle(
            http_get, timeout=config.timeout, api_url=config.api_url
        )
        fetcher = GitHubFileFetcher(
            http_get,
            timeout=config.timeout,
            raw_url=config.raw_url,
            branch=config.branch,
        )
        return cls(oracle, fetcher)

    async def resolve(self, dependency: Dependency) -> Conclusion:
        """Determine the license of a dependency.

        Never raises for expected failures (missing paths, network
        errors, unrecognized texts); they end up as evidence on an
        Unresolved conclusion.

        Args:
            dependency: Dependency to resolve.

        Returns:
            Conclusion for the dependency.
        """
        resolution = _Resolution(dependency)
        state = ResolutionState.START
        result = StageResult.SUCCESS

        while not state.is_terminal:
            if state != ResolutionState.START:
                resolution.stage = state
                result = await self._stages[state](resolution)
            following = next_state(state, result, resolution.repository is not None)
            logger.debug(
                "%s@%s: %s -> %s",
                dependency.name,
                dependency.version,
                state.value,
                following.value,
            )
            state = following

        conclusion = resolution.conclude()
        if conclusion.is_resolved:
            logger.info(
                "%s@%s resolved to %s in %s",
                dependency.name,
                dependency.version,
                conclusion.license.value if conclusion.license else None,
                conclusion.terminal_stage.value,
            )
        else:
            logger.info(
                "%s@%s unresolved after %d attempt(s)",
                dependency.name,
                dependency.version,
                len(conclusion.evidence),
            )
        return conclusion

    async def _local_search(self, resolution: _Resolution) -> StageResult:
        """Classify every license-like file at the root of the source tree."""
        source_path = resolution.dependency.source_path
        if source_path is None:
            resolution.record(
                Evidence(
                    source=EvidenceSource.LOCAL,
                    locator="",
                    outcome=EvidenceOutcome.LOCAL_PATH_ERROR,
                    detail="Dependency has no local source path",
                )
            )
            return StageResult.FATAL

        try:
            listing = self._list_dir(source_path)
        except OSError as e:
            resolution.record(
                Evidence(
                    source=EvidenceSource.LOCAL,
                    locator=str(source_path),
                    outcome=EvidenceOutcome.LOCAL_PATH_ERROR,
                    detail=f"Cannot list source directory: {e}",
                )
            )
            return StageResult.FATAL

        candidates = match_license_filenames(listing)
        if not candidates:
            resolution.record(
                Evidence(
                    source=EvidenceSource.LOCAL,
                    locator=str(source_path),
                    outcome=EvidenceOutcome.NOT_FOUND,
                    detail="No license files in source directory",
                )
            )
            return StageResult.FAILURE

        contents: dict[str, bytes] = {}
        matched: list[Evidence] = []
        for filename in candidates:
            path = Path(source_path) / filename
            try:
                content = self._read(path)
            except OSError as e:
                resolution.record(
                    Evidence(
                        source=EvidenceSource.LOCAL,
                        locator=str(path),
                        outcome=EvidenceOutcome.READ_ERROR,
                        detail=str(e),
                    )
                )
                continue

            evidence = resolution.record(
                self._classified(EvidenceSource.LOCAL, str(path), content)
            )
            if evidence.classification is not None:
                matched.append(evidence)
                contents[evidence.locator] = content

        family = LicenseFamily.preferred(item.classification for item in matched)
        if family is None:
            return StageResult.FAILURE

        winner = next(item for item in matched if item.classification == family)
        resolution.accept(family, winner.locator, contents[winner.locator])
        return StageResult.SUCCESS

    async def _oracle_query(self, resolution: _Resolution) -> StageResult:
        """Ask the hosting provider which license the repository carries."""
        result = await self._oracle.query(resolution.require_repository())

        if result.status != OracleStatus.REPORTED:
            resolution.record(
                Evidence(
                    source=EvidenceSource.ORACLE_API,
                    locator=result.url,
                    outcome=OUTCOME_BY_ORACLE_STATUS[result.status],
                    detail=result.detail,
                )
            )
            return StageResult.FAILURE

        byte_length = len(result.content) if result.content else 0
        family = LicenseFamily.from_spdx(result.spdx_id)
        if family is None:
            resolution.record(
                Evidence(
                    source=EvidenceSource.ORACLE_API,
                    locator=result.url,
                    byte_length=byte_length,
                    outcome=EvidenceOutcome.UNACCEPTED_LICENSE,
                    detail=f"license.spdx_id is {result.spdx_id}",
                )
            )
            return StageResult.FAILURE

        resolution.record(
            Evidence(
                source=EvidenceSource.ORACLE_API,
                locator=result.url,
                byte_length=byte_length,
                outcome=EvidenceOutcome.MATCHED,
                classification=family,
                detail=f"license.spdx_id is {result.spdx_id}",
            )
        )
        resolution.accept(family, result.download_url or result.url, result.content)
        return StageResult.SUCCESS

    async def _remote_search(self, resolution: _Resolution) -> StageResult:
        """Fetch conventional license filenames until one classifies."""
        repository = resolution.require_repository()
        for filename in remote_candidates():
            result = await self._fetcher.fetch(repository, filename)

            if result.status != FetchStatus.FOUND or result.content is None:
                resolution.record(
                    Evidence(
                        source=EvidenceSource.REMOTE_FETCH,
                        locator=result.url,
                        outcome=OUTCOME_BY_FETCH_STATUS.get(
                            result.status, EvidenceOutcome.NOT_FOUND
                        ),
                        detail=result.detail,
                    )
                )
                continue

            evidence = resolution.record(
                self._classified(
                    EvidenceSource.REMOTE_FETCH, result.url, result.content
                )
            )
            if evidence.classification is not None:
                resolution.accept(
                    evidence.classification, result.url, result.content
                )
                return StageResult.SUCCESS

        return StageResult.FAILURE

    @staticmethod
    def _classified(
        source: EvidenceSource, locator: str, content: bytes
    ) -> Evidence:
        """Classify content and describe the attempt as evidence."""
        classification = classify(content)
        if classification.family is None:
            return Evidence(
                source=source,
                locator=locator,
                byte_length=len(content),
                outcome=EvidenceOutcome.UNRECOGNIZED,
                detail="Content does not match an accepted license",
            )
        detail = f"Matched fingerprint {classification.fingerprint}"
        others = [
            family.value
            for family in classification.candidates
            if family != classification.family
        ]
        if others:
            detail += f" (also matches {', '.join(others)})"
        return Evidence(
            source=source,
            locator=locator,
            byte_length=len(content),
            outcome=EvidenceOutcome.MATCHED,
            classification=classification.family,
            detail=detail,
        )


def aborted_conclusion(
    dependency: Dependency, error: LicenseHoundError
) -> Conclusion:
    """Conclusion for a dependency whose resolution was aborted by an error.

    Args:
        dependency: Dependency whose resolution failed.
        error: Error that stopped the resolution.

    Returns:
        Unresolved Conclusion recording the error as evidence.
    """
    if isinstance(error, NetworkError):
        evidence = Evidence(
            source=EvidenceSource.REMOTE_FETCH,
            locator=dependency.repository or "",
            outcome=EvidenceOutcome.NETWORK_ERROR,
            detail=f"Resolution aborted: {error}",
        )
        stage = ResolutionState.REMOTE_SEARCH
    else:
        source_path = dependency.source_path
        evidence = Evidence(
            source=EvidenceSource.LOCAL,
            locator=str(source_path) if source_path is not None else "",
            outcome=EvidenceOutcome.LOCAL_PATH_ERROR,
            detail=f"Resolution aborted: {error}",
        )
        stage = ResolutionState.LOCAL_SEARCH

    return Conclusion(
        name=dependency.name,
        version=dependency.version,
        repository=dependency.repository,
        evidence=(evidence,),
        terminal_stage=stage,
    )
