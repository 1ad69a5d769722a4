"""Per-invocation view of the Railway CLI configuration.

:class:`Configs` owns the loaded :class:`RailwayConfig` document and the
path of its backing file. Command handlers construct one per process,
read and mutate it through the methods below and call :meth:`Configs.write`
to make changes durable; nothing here writes implicitly except the
update-check throttle timestamp.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path, PurePath
from typing import Callable, Optional, Type

from pydantic import ValidationError

from railway_cli.client.graphql import GQLClient
from railway_cli.client.queries import PROJECT_TOKEN_QUERY, ProjectTokenResponse
from railway_cli.config.environment import (
    EnvSnapshot,
    Environment,
    backboard_url,
    config_relative_path,
    host_for,
    is_ci,
    relay_host_path,
    resolve_auth_token,
    resolve_environment,
)
from railway_cli.config.resolution import require_closest_linked_directory
from railway_cli.config.schema import LinkedProject, RailwayConfig
from railway_cli.config.store import (
    LoadResult,
    load_config,
    resolve_home_dir,
    write_config,
)
from railway_cli.constants import CLI_VERSION
from railway_cli.display.console import DEFAULT_RENDER_CONFIG, RenderConfig, warn
from railway_cli.errors import GraphQLError, NoLinkedProjectError, ProjectNotFoundError
from railway_cli.update import ReleaseClient, newer_version

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Configs:
    """Loaded config document plus environment-derived settings.

    Parameters
    ----------
    env:
        Snapshot of the relevant environment variables. Defaults to the
        current process environment.
    home:
        Home directory override; resolved from the OS when omitted.
    cwd:
        Working directory override; ``os.getcwd()`` is used when omitted.
    path_flavour:
        ``PurePath`` class used to split directories for the linked-project
        walk (the native flavour by default).
    """

    def __init__(
        self,
        *,
        env: Optional[EnvSnapshot] = None,
        home: Optional[str] = None,
        cwd: Optional[str] = None,
        path_flavour: Type[PurePath] = PurePath,
    ) -> None:
        self.env = env if env is not None else EnvSnapshot.from_os()
        self._cwd = cwd
        self._path_flavour = path_flavour

        home_dir = resolve_home_dir(home)
        self.root_config_path: Path = home_dir / config_relative_path(self.get_environment_id())

        self.load_result: LoadResult = load_config(self.root_config_path)
        if self.load_result.regenerated:
            warn("Unable to parse config file, regenerating")
        self.root_config: RailwayConfig = self.load_result.config

    def reset(self) -> None:
        """Replace the document with an empty one (not persisted until :meth:`write`)."""
        self.root_config = RailwayConfig.empty()

    # ── environment & tokens ────────────────────────────────────────

    def get_railway_token(self) -> Optional[str]:
        """Project-scoped token (``RAILWAY_TOKEN``)."""
        return self.env.project_token

    def get_railway_api_token(self) -> Optional[str]:
        """Account/team token (``RAILWAY_API_TOKEN``)."""
        return self.env.api_token

    def env_is_ci(self) -> bool:
        return is_ci(self.env)

    def get_railway_auth_token(self) -> Optional[str]:
        """Token from the environment, falling back to the config file."""
        return resolve_auth_token(self.env, self.root_config.user.token)

    def get_environment_id(self) -> Environment:
        return resolve_environment(self.env)

    def get_host(self) -> str:
        return host_for(self.get_environment_id())

    def get_relay_host_path(self) -> str:
        return relay_host_path(self.get_host())

    def get_backboard(self) -> str:
        return backboard_url(self.get_host())

    @staticmethod
    def get_render_config() -> RenderConfig:
        return DEFAULT_RENDER_CONFIG

    # ── directory resolution ────────────────────────────────────────

    def get_current_directory(self) -> str:
        if self._cwd is not None:
            return self._cwd
        return os.getcwd()

    def _link_key(self, path: str) -> str:
        """Normalise *path* the way the linked-project walk spells directories."""
        return str(self._path_flavour(path))

    def get_closest_linked_project_directory(self) -> str:
        """Nearest linked ancestor of the working directory (inclusive).

        With a project token the working directory itself is returned,
        linked or not. Raises :class:`NoLinkedProjectError` otherwise when
        nothing in the chain is linked.
        """
        if self.get_railway_token() is not None:
            return self.get_current_directory()

        return require_closest_linked_directory(
            self.root_config.projects,
            self.get_current_directory(),
            self._path_flavour,
        )

    async def get_linked_project(self, *, client: Optional[GQLClient] = None) -> LinkedProject:
        """Resolve the project, environment and service for the working directory.

        With a project token the identity comes from the API and only the
        service id is taken from a link recorded for the working directory.
        """
        if self.get_railway_token() is not None:
            return await self._get_linked_project_from_token(client)

        path = self.get_closest_linked_project_directory()
        return self.root_config.projects[path].model_copy()

    async def _get_linked_project_from_token(
        self, client: Optional[GQLClient]
    ) -> LinkedProject:
        owns_client = client is None
        if client is None:
            client = GQLClient.new_authorized(self)
        try:
            data = await client.post_graphql(PROJECT_TOKEN_QUERY)
        finally:
            if owns_client:
                await client.close()

        try:
            token = ProjectTokenResponse.model_validate(data).project_token
        except ValidationError as exc:
            raise GraphQLError(
                f"unexpected project token response ({exc.error_count()} invalid field(s))"
            ) from exc
        current_dir = self._link_key(self.get_current_directory())
        stored = self.root_config.projects.get(current_dir)
        logger.debug(
            "Project token resolved to project %s, environment %s",
            token.project.id,
            token.environment.id,
        )
        return LinkedProject(
            project_path=current_dir,
            name=token.project.name,
            project=token.project.id,
            environment=token.environment.id,
            environment_name=token.environment.name,
            service=stored.service if stored is not None else None,
        )

    def get_linked_project_mut(self) -> LinkedProject:
        """Return the stored entry for the working directory, for in-place updates.

        There is no stored entry behind a project token's identity, so with
        ``RAILWAY_TOKEN`` set this always raises :class:`ProjectNotFoundError`.
        """
        if self.get_railway_token() is not None:
            raise ProjectNotFoundError(
                "Project not found. Linked services cannot be changed while RAILWAY_TOKEN is set"
            )

        path = self.get_closest_linked_project_directory()
        project = self.root_config.projects.get(path)
        if project is None:
            raise ProjectNotFoundError()
        return project

    # ── mutations (in memory only) ──────────────────────────────────

    def link_project(
        self,
        project_id: str,
        name: Optional[str],
        environment_id: str,
        environment_name: Optional[str],
    ) -> None:
        """Link the working directory itself, replacing any existing link."""
        path = self._link_key(self.get_current_directory())
        self.root_config.projects[path] = LinkedProject(
            project_path=path,
            name=name,
            project=project_id,
            environment=environment_id,
            environment_name=environment_name,
            service=None,
        )
        logger.debug("Linked %s to project %s (environment %s)", path, project_id, environment_id)

    def link_service(self, service_id: str) -> None:
        self.get_linked_project_mut().service = service_id

    def unlink_service(self) -> None:
        self.get_linked_project_mut().service = None

    def unlink_project(self) -> None:
        """Remove the closest link; does nothing when nothing is linked."""
        try:
            path = self.get_closest_linked_project_directory()
        except NoLinkedProjectError:
            return
        self.root_config.projects.pop(path, None)

    # ── persistence ─────────────────────────────────────────────────

    def write(self) -> None:
        """Atomically persist the whole document. Raises :class:`ConfigWriteError`."""
        write_config(self.root_config_path, self.root_config)

    # ── update check ────────────────────────────────────────────────

    async def check_update(
        self,
        force: bool = False,
        *,
        release_client: Optional[ReleaseClient] = None,
        is_terminal: Optional[Callable[[], bool]] = None,
        current_version: Optional[str] = None,
    ) -> Optional[str]:
        """Return the latest released version if it is newer than this one.

        Skipped (returns ``None``) when stdout is not a terminal or when a
        check already happened today (UTC), unless *force* is set. Once the
        release endpoint answers, the check time is persisted before the
        answer is interpreted, so a bad response still counts as today's check.
        """
        if is_terminal is None:
            is_terminal = sys.stdout.isatty
        if not force and not is_terminal():
            return None

        last_check = self.root_config.last_update_check
        if not force and last_check is not None:
            if last_check.tzinfo is None:
                last_check = last_check.replace(tzinfo=timezone.utc)
            if _utcnow().date() == last_check.astimezone(timezone.utc).date():
                logger.debug("Update already checked today (%s)", last_check.isoformat())
                return None

        owns_client = release_client is None
        if release_client is None:
            release_client = ReleaseClient()
        try:
            resp = await release_client.fetch()
        finally:
            if owns_client:
                await release_client.close()

        self.root_config.last_update_check = _utcnow()
        self.write()

        latest = ReleaseClient.parse_tag(resp)
        return newer_version(current_version or CLI_VERSION, latest)
