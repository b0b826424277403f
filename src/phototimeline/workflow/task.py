"""End-to-end organization run."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Literal, Optional

from phototimeline.indexing import merge_indices, reconcile
from phototimeline.ingestion import DirectoryLoader, ProgressCallback
from phototimeline.organization import FileMover, MoveError, MoveFailure, MovePhase

from .models import RunArguments, RunSummary
from .progress import ProgressTracker
from .validation import validate_arguments

LOGGER = logging.getLogger(__name__)

MoveFailurePolicy = Literal["skip", "abort"]

_DEBUG_NOTE = (
    "Debug mode is enabled, which usually means something unexpected happened. "
    "Keep this output when reporting the problem."
)


class OrganizerTask:
    """Load, reconcile and move files for one input/output pair."""

    def __init__(
        self,
        loader: DirectoryLoader,
        mover: FileMover,
        *,
        move_failure_policy: MoveFailurePolicy = "skip",
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        if move_failure_policy not in ("skip", "abort"):
            raise ValueError(f"Unsupported move failure policy: {move_failure_policy}")
        self.loader = loader
        self.mover = mover
        self.move_failure_policy = move_failure_policy
        self.progress = progress or ProgressTracker()

    def run(self, args: RunArguments) -> RunSummary:
        """Organize ``args.input_root`` into ``args.output_base_root``.

        Counts are logged before anything moves, so a dry run reports exactly
        what a real run would do.

        Raises:
            ConfigurationError: If the roots fail validation; nothing is touched.
            ScanError: If a root cannot be listed.
            MoveError: If a move fails and the policy is ``abort``.
        """
        validation = validate_arguments(args)
        if validation.error is not None:
            raise validation.error

        LOGGER.debug("Debug mode enabled")

        LOGGER.info("Loading already processed files, it may take some minutes, be patient")
        organized = self.loader.load(args.organized_root, self.progress)
        processed, invalid_processed = organized.index, organized.invalid
        LOGGER.info("Already processed files loaded: %d", len(processed))
        if invalid_processed:
            LOGGER.warning(
                "There are %d files on the output folder without enough metadata to process, "
                "which you need to organize manually",
                len(invalid_processed),
            )

        LOGGER.info("Loading files to process, it may take some minutes, be patient")
        incoming = self.loader.load(args.input_root, self.progress)
        to_process, invalid_to_process = incoming.index, incoming.invalid
        LOGGER.info("Files to process loaded: %d", len(to_process))
        if invalid_to_process:
            LOGGER.warning(
                "There are %d files on the input folder without enough metadata to process",
                len(invalid_to_process),
            )

        LOGGER.info("Indexing now... it may take some minutes, be patient")
        all_files = merge_indices(processed, to_process)
        reconciliation = reconcile(processed, to_process)

        summary = RunSummary(
            input_root=args.input_root,
            output_root=args.output_base_root,
            dry_run=args.dry_run,
            unique_files=len(all_files),
            already_organized=len(processed),
            new_duplicates=len(reconciliation.new_duplicate),
            new_unique=len(reconciliation.new_unique),
            invalid_input=len(invalid_to_process),
            invalid_output=len(invalid_processed),
        )
        LOGGER.info("Initial indexing done")
        LOGGER.info("- Unique files: %d", summary.unique_files)
        LOGGER.info("- Already organized files: %d", summary.already_organized)
        LOGGER.info("- New duplicated files: %d", summary.new_duplicates)
        LOGGER.info("- New unique files to organize: %d", summary.new_unique)

        if args.dry_run:
            LOGGER.info("Files not affected because dry-run is enabled")
        else:
            LOGGER.info("Moving duplicated files to: %s", args.duplicated_root)
            summary.moved_duplicates = self._run_phase(
                "duplicate",
                [record.source for record in reconciliation.new_duplicate],
                args.duplicated_root,
                lambda source: self.mover.safe_move(args.duplicated_root, source),
                summary,
            )

            LOGGER.info("Moving invalid files to: %s", args.invalid_root)
            summary.moved_invalid = self._run_phase(
                "invalid",
                invalid_to_process,
                args.invalid_root,
                lambda source: self.mover.safe_move(args.invalid_root, source),
                summary,
            )

            LOGGER.info("Organizing unique files to: %s", args.organized_root)
            dates = {record.source: record.created_on for record in reconciliation.new_unique}
            summary.organized = self._run_phase(
                "organize",
                [record.source for record in reconciliation.new_unique],
                args.organized_root,
                lambda source: self.mover.organize_by_date(
                    args.organized_root, source, dates[source]
                ),
                summary,
            )

            LOGGER.info("Cleaning up empty directories")
            removed = self.mover.clean_empty_directories(args.input_root)
            removed += self.mover.clean_empty_directories(args.organized_root)
            summary.removed_directories = len(removed)

        LOGGER.info("Done")
        if args.debug:
            LOGGER.debug(_DEBUG_NOTE)
        if args.dry_run:
            LOGGER.info("Remember to remove the --dry-run option to actually organize the photos")
        return summary

    def _run_phase(
        self,
        phase: MovePhase,
        sources: list[Path],
        destination: Path,
        move: Callable[[Path], Path],
        summary: RunSummary,
    ) -> int:
        moved = 0
        total = len(sources)
        for position, source in enumerate(sources):
            self.progress(position, total)
            try:
                move(source)
            except MoveError as exc:
                if self.move_failure_policy == "abort":
                    raise
                LOGGER.error("Skipping %s: %s", source, exc)
                summary.failures.append(
                    MoveFailure(
                        phase=phase, source=source, destination=destination, reason=str(exc)
                    )
                )
            else:
                moved += 1
        return moved


__all__ = ["MoveFailurePolicy", "OrganizerTask"]
