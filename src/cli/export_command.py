"""Export command orchestration for CLI.

This module provides the ExportCommand class that runs one complete export:
Postman workspace → Markdown tree → git commit and push → GitLab issue
reconciliation of the commit's diff.
"""

import logging
from pathlib import Path
from typing import List, Optional

from src.cli.models import ExitCode, ExportSummary, RunConfig
from src.cli.output import OutputHandler
from src.doc_renderer.collection_parser import parse_collection
from src.doc_renderer.output_directory import prepare_output_directory
from src.doc_renderer.sanitizer import sanitize
from src.doc_renderer.tree_renderer import TreeRenderer, ensure_directory
from src.git_integration.git_repository import GitRepository
from src.issue_tracker.change_feed import ChangeFeedPager
from src.issue_tracker.errors import TrackerError
from src.issue_tracker.gitlab_client import GitLabClient
from src.issue_tracker.issue_index import IssueIndex
from src.issue_tracker.models import ReconcileAction, ReconcileSummary
from src.issue_tracker.reconciler import IssueReconciler
from src.postman_client.api_wrapper import PostmanClient
from src.postman_client.errors import (
    APIUnreachableError,
    InvalidCredentialsError,
    SyncError,
)

logger = logging.getLogger(__name__)

WORKSPACE_SNAPSHOT = "workspace.json"
COLLECTION_SNAPSHOT = "collection.json"


class ExportCommand:
    """Orchestrates the export workflow for the CLI.

    The workflow:
        1. Empty the output directory (hidden entries such as .git are kept)
        2. List the workspace's collections and keep the selected ones
        3. Fetch, parse and render each collection into its own directory
        4. Commit and push the documentation tree
        5. Page through the commit's diff and reconcile the GitLab issues
        6. Return an exit code

    When a commit id is given, steps 1-4 are skipped and only the diff of
    that commit is reconciled, which replays a failed reconciliation.

    Example:
        >>> config = ConfigLoader.load()
        >>> exit_code = ExportCommand(config, OutputHandler(verbosity=1)).run()
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        config: RunConfig,
        output_handler: Optional[OutputHandler] = None,
        postman_client: Optional[PostmanClient] = None,
        git_repository: Optional[GitRepository] = None,
        tracker: Optional[GitLabClient] = None,
        renderer: Optional[TreeRenderer] = None,
    ):
        """Initialize export command with dependencies.

        Args:
            config: Run configuration
            output_handler: OutputHandler for terminal output (optional)
            postman_client: Collection source (optional)
            git_repository: Version control of the output directory (optional)
            tracker: GitLab issue tracker and diff source (optional)
            renderer: Collection tree renderer (optional)

        Note:
            Dependencies are created from the configuration when not given.
        """
        self.config = config
        self.output_handler = output_handler or OutputHandler()
        self.postman_client = postman_client
        self.git_repository = git_repository
        self.tracker = tracker
        self.renderer = renderer or TreeRenderer()

    def run(self, commit: Optional[str] = None, skip_issues: bool = False) -> ExitCode:
        """Execute the export.

        Args:
            commit: Reconcile this existing commit instead of exporting
            skip_issues: Export and commit without touching the tracker

        Returns:
            ExitCode indicating success or specific failure type
        """
        summary = ExportSummary()

        try:
            if commit is None:
                self._export(summary)
                commits = self._commit(summary)
            else:
                commits = [commit]

            if commits and not skip_issues:
                summary.reconcile = ReconcileSummary()
                for commit_id in commits:
                    summary.commit_ids.append(commit_id)
                    summary.reconcile.merge(self._reconcile(commit_id))

                ignored = summary.reconcile.count(ReconcileAction.UNSUPPORTED)
                if ignored:
                    self.output_handler.warning(
                        f"{ignored} renamed document(s) ignored, their issues were not updated"
                    )

            self.output_handler.print_summary(summary)
            self.output_handler.success("Export completed")
            return ExitCode.SUCCESS

        except InvalidCredentialsError as e:
            logger.error(f"Authentication failed: {e}")
            self.output_handler.error(f"Authentication failed: {e}")
            return ExitCode.AUTH_ERROR

        except APIUnreachableError as e:
            logger.error(f"Network error: {e}")
            self.output_handler.error(f"Network error: {e}")
            return ExitCode.NETWORK_ERROR

        except TrackerError as e:
            logger.error(f"Issue reconciliation failed: {e}")
            self.output_handler.error(f"Issue reconciliation failed: {e}")
            return ExitCode.TRACKER_ERROR

        except SyncError as e:
            logger.error(f"Export failed: {e}")
            self.output_handler.error(f"Export failed: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during export")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    def _commit(self, summary: ExportSummary) -> List[str]:
        """Commit and push the tree.

        Returns:
            Ids of the commits the remote received in this run, oldest first.
            Commits whose push failed in an earlier run come before the new one.
        """
        repo = self._get_git_repository()

        pending = repo.unpushed_commits() if repo.push_enabled else []
        if pending:
            self.output_handler.warning(
                f"{len(pending)} commit(s) from an earlier run were not pushed, pushing now"
            )

        summary.committed = repo.commit_and_push(self.config.git.commit_message)
        if not summary.committed:
            self.output_handler.info("Documentation unchanged, nothing committed")
            return []

        head = repo.current_commit_id()
        if head in pending:
            return pending
        return pending + [head]

    def _export(self, summary: ExportSummary) -> None:
        """Render every selected collection of the workspace."""
        output_dir = prepare_output_directory(Path(self.config.output_dir))
        client = self._get_postman_client()
        save_raw = self.config.save_raw_json

        with self.output_handler.spinner("Reading workspace..."):
            collections = client.get_workspace(
                self.config.workspace_id,
                save_to=output_dir / WORKSPACE_SNAPSHOT if save_raw else None,
            )

        selected = set(self.config.collections)
        for collection in collections:
            if selected and collection.uid not in selected:
                self.output_handler.info(f"Skip collection: {collection.name}")
                summary.skipped_collections.append(collection.name)
                continue

            logger.info(f"Collection [{collection.name}] is processing...")
            directory = ensure_directory(output_dir / sanitize(collection.name))

            with self.output_handler.spinner(f"Fetching {collection.name}..."):
                data = client.get_collection(
                    collection.uid,
                    save_to=directory / COLLECTION_SNAPSHOT if save_raw else None,
                )

            documents = self.renderer.render(parse_collection(data), directory)
            summary.exported_collections.append(collection.name)
            summary.documents_written += len(documents)
            for document in documents:
                self.output_handler.debug(f"Wrote {document.path}")
            self.output_handler.info(
                f"Collection [{collection.name}] done: {len(documents)} document(s)"
            )

    def _reconcile(self, commit: str) -> ReconcileSummary:
        """Reconcile the tracker issues with the diff of a commit."""
        settings = self.config.tracker
        if settings is None:
            raise TrackerError("No tracker configured, cannot reconcile issues")

        tracker = self._get_tracker()
        reconciler = IssueReconciler(
            tracker,
            IssueIndex(tracker),
            create_label=settings.create_label,
            delete_label=settings.delete_label,
            collection_label_prefix=settings.collection_label_prefix,
        )
        pager = ChangeFeedPager(tracker, per_page=settings.per_page)

        self.output_handler.info(f"Reconciling issues for commit {commit[:8]}")
        return reconciler.reconcile_feed(pager.pages(commit), commit)

    def _get_postman_client(self) -> PostmanClient:
        if self.postman_client is None:
            self.postman_client = PostmanClient(api_key=self.config.postman_api_key)
        return self.postman_client

    def _get_git_repository(self) -> GitRepository:
        if self.git_repository is None:
            git = self.config.git
            self.git_repository = GitRepository(
                self.config.output_dir,
                remote=git.remote,
                branch=git.branch,
                push=git.push,
            )
        return self.git_repository

    def _get_tracker(self) -> GitLabClient:
        if self.tracker is None:
            settings = self.config.tracker
            self.tracker = GitLabClient(
                base_url=settings.gitlab_url,
                token=self.config.gitlab_token,
                project_id=settings.project_id,
                request_delay=settings.request_delay,
            )
        return self.tracker
