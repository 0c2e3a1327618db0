"""Generation pipeline orchestration."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from .. import __version__
from ..config import GeneratorConfig
from ..emit import Emitter, EmissionProfile, GenerationUnit
from ..errors import ConfigError, EmptyTable, StringsGenError, TableError
from ..naming import derive_signatures
from ..strings import ResourceTable, load_table, validate_entries
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class GeneratedOutput:
    """Source text generated for one table.

    Attributes:
        table: Name of the source table.
        filename: Default file name from the emission profile.
        text: The generated source.
        source_path: Path of the source table, if read from disk.
    """
    table: str
    filename: str
    text: str
    source_path: Optional[Path] = None


@dataclass
class GenerationResult:
    """Result of a generation run.

    Attributes:
        outputs: Generated sources of the tables that succeeded, in input order.
        errors: Errors of the tables that failed, plus non-fatal notices.
        table_count: Number of tables in the run.
    """
    outputs: list[GeneratedOutput] = field(default_factory=list)
    errors: list[StringsGenError] = field(default_factory=list)
    table_count: int = 0

    @property
    def fatal_errors(self) -> list[StringsGenError]:
        return [error for error in self.errors if error.fatal]

    @property
    def ok(self) -> bool:
        """True if no table failed."""
        return not self.fatal_errors


@dataclass
class _TableOutcome:
    output: Optional[GeneratedOutput] = None
    errors: list[StringsGenError] = field(default_factory=list)


TableSource = Union[ResourceTable, str, Path]

TableCallback = Callable[[str, Optional[StringsGenError]], None]


class GenerationService:
    """Runs parse, analyze, derive and emit for each table in isolation."""

    def __init__(
        self,
        profile: EmissionProfile,
        config: Optional[GeneratorConfig] = None
    ):
        """Initialize the generation service.

        Args:
            profile: Emission profile for every table of the run.
            config: Generator configuration.
        """
        self.config = config or GeneratorConfig()
        self.profile = profile
        if profile.string_as_object is None and self.config.string_as_object:
            self.profile = profile.with_options(string_as_object=True)
        self.emitter = Emitter(self.profile)

    def generate(
        self,
        sources: Sequence[TableSource],
        on_table_done: Optional[TableCallback] = None
    ) -> GenerationResult:
        """Generate sources for a batch of tables.

        A fatal error aborts only its own table; the others still produce
        output. Results keep input order even when tables run in parallel.

        Args:
            sources: Parsed tables or paths of table files.
            on_table_done: Optional callback receiving each table's name and
                its fatal error, if any.

        Returns:
            GenerationResult with outputs and errors.
        """
        jobs = max(1, self.config.jobs)
        if jobs > 1 and len(sources) > 1:
            with ThreadPoolExecutor(max_workers=jobs) as executor:
                futures = [executor.submit(self._run_table, source) for source in sources]
                outcomes = [future.result() for future in futures]
        else:
            outcomes = [self._run_table(source) for source in sources]

        result = GenerationResult(table_count=len(sources))
        for source, outcome in zip(sources, outcomes):
            if outcome.output is not None:
                result.outputs.append(outcome.output)
            result.errors.extend(outcome.errors)
            if on_table_done:
                fatal = next((e for e in outcome.errors if e.fatal), None)
                on_table_done(_source_name(source), fatal)

        logger.info(
            "Generated %d of %d table(s) with profile %s",
            len(result.outputs), len(sources), self.profile.name
        )
        return result

    def _run_table(self, source: TableSource) -> _TableOutcome:
        outcome = _TableOutcome()
        try:
            table = self._load(source)
            validate_entries(table.entries, self.config.separator)
            signatures = derive_signatures(table, self.config.separator, self.profile.charset)
            unit = GenerationUnit(
                table=table,
                signatures=signatures,
                generator_version=__version__,
                separator=self.config.separator
            )
            text = self.emitter.emit(unit)
        except StringsGenError as e:
            if isinstance(e, TableError):
                e.with_location(source.path if isinstance(source, ResourceTable) else Path(source))
            logger.info("Table %s failed: %s", _source_name(source), e)
            outcome.errors.append(e)
            return outcome

        if not table.entries:
            logger.info("Table %s has no entries", table.name)
            outcome.errors.append(EmptyTable(table.name, path=table.path))

        outcome.output = GeneratedOutput(
            table=table.name,
            filename=self.emitter.output_filename(table),
            text=text,
            source_path=table.path
        )
        return outcome

    def _load(self, source: TableSource) -> ResourceTable:
        if isinstance(source, ResourceTable):
            return source
        logger.debug("Parsing %s", source)
        return load_table(source, self.config.input_format, self.config.separator)


def generate(
    tables: Sequence[TableSource],
    profile: EmissionProfile,
    config: Optional[GeneratorConfig] = None
) -> GenerationResult:
    """Generate accessor sources for tables with one emission profile.

    Args:
        tables: Parsed tables or paths of table files.
        profile: Target-language emission profile.
        config: Generator configuration.

    Returns:
        GenerationResult with one output per successful table.
    """
    return GenerationService(profile, config).generate(tables)


def generate_files(
    paths: Sequence[Union[str, Path]],
    profile: EmissionProfile,
    config: Optional[GeneratorConfig] = None
) -> GenerationResult:
    """Parse and generate table files, isolating parse errors per table."""
    return generate([Path(p) for p in paths], profile, config)


def write_outputs(
    result: GenerationResult,
    destination: Union[str, Path]
) -> list[Path]:
    """Write generated sources to disk.

    For a single-table run, ``destination`` is the output file unless it is
    an existing directory. For several tables it is a directory and each
    file takes its profile file name. Files whose content is unchanged are
    left untouched.

    Args:
        result: The generation result.
        destination: Output file or directory.

    Returns:
        Paths that were written.

    Raises:
        ConfigError: If two outputs map to the same file. Nothing is written.
    """
    destination = Path(destination)
    targets = []
    owners: dict[Path, GeneratedOutput] = {}

    for output in result.outputs:
        if result.table_count <= 1 and not destination.is_dir():
            path = destination
        else:
            path = destination / output.filename

        if path in owners:
            raise ConfigError(
                f"Tables '{_output_source(owners[path])}' and '{_output_source(output)}' "
                f"both generate {path}",
                {"hint": "use separate outputs or a {table} file name parameter"}
            )
        owners[path] = output
        targets.append((path, output))

    written = []
    for path, output in targets:
        content = output.text.encode('utf-8')
        if path.is_file() and path.read_bytes() == content:
            logger.info("Not writing %s as content is unchanged", path)
            continue

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        logger.info("Wrote %s", path)
        written.append(path)

    return written


def _source_name(source: TableSource) -> str:
    if isinstance(source, ResourceTable):
        return source.name
    return str(source)


def _output_source(output: GeneratedOutput) -> str:
    if output.source_path is not None:
        return str(output.source_path)
    return output.table
