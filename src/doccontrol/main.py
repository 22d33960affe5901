"""Application entry point and composition root."""

import argparse
import asyncio
import logging
import signal
from collections.abc import Awaitable, Callable

import falcon.asgi

from doccontrol import __version__
from doccontrol.application.ports import (
    BlobStore,
    Clock,
    NotificationSink,
    PermissionChecker,
    UnitOfWorkFactory,
)
from doccontrol.application.use_cases.access.grant_access import GrantAccessUseCase
from doccontrol.application.use_cases.access.list_access import ListAccessUseCase
from doccontrol.application.use_cases.access.revoke_access import RevokeAccessUseCase
from doccontrol.application.use_cases.activity.list_activities import ListActivitiesUseCase
from doccontrol.application.use_cases.comment.add_comment import AddCommentUseCase
from doccontrol.application.use_cases.comment.list_comments import ListCommentsUseCase
from doccontrol.application.use_cases.document.delete_document import DeleteDocumentUseCase
from doccontrol.application.use_cases.document.edit_metadata import EditMetadataUseCase
from doccontrol.application.use_cases.document.get_document import GetDocumentUseCase
from doccontrol.application.use_cases.document.list_documents import ListDocumentsUseCase
from doccontrol.application.use_cases.document.upload_document import UploadDocumentUseCase
from doccontrol.application.use_cases.expiry.expiry_sweep import ExpirySweepUseCase
from doccontrol.application.use_cases.expiry.set_expiry_settings import SetExpirySettingsUseCase
from doccontrol.application.use_cases.lifecycle.approve_document import ApproveDocumentUseCase
from doccontrol.application.use_cases.lifecycle.archive_document import ArchiveDocumentUseCase
from doccontrol.application.use_cases.lifecycle.publish_document import PublishDocumentUseCase
from doccontrol.application.use_cases.lifecycle.reject_document import RejectDocumentUseCase
from doccontrol.application.use_cases.lifecycle.reopen_document import ReopenDocumentUseCase
from doccontrol.application.use_cases.lifecycle.submit_for_approval import (
    SubmitForApprovalUseCase,
)
from doccontrol.application.use_cases.locking.checkin_document import CheckinDocumentUseCase
from doccontrol.application.use_cases.locking.checkout_document import CheckoutDocumentUseCase
from doccontrol.application.use_cases.locking.force_unlock import ForceUnlockUseCase
from doccontrol.application.use_cases.version.get_download_url import GetDownloadUrlUseCase
from doccontrol.application.use_cases.version.list_versions import ListVersionsUseCase
from doccontrol.application.use_cases.version.revert_to_version import RevertToVersionUseCase
from doccontrol.config import Settings, get_settings
from doccontrol.domain.lifecycle import LifecycleStateMachine
from doccontrol.infrastructure.auth.keycloak_provider import KeycloakProvider
from doccontrol.infrastructure.clock import SystemClock
from doccontrol.infrastructure.notification.logging_sink import LoggingNotificationSink
from doccontrol.infrastructure.notification.webhook_sink import WebhookNotificationSink
from doccontrol.infrastructure.permission.permission_checker import GrantPermissionChecker
from doccontrol.infrastructure.persistence.postgres.connection import create_pool, ping
from doccontrol.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from doccontrol.infrastructure.storage.http_blob_store import HttpBlobStore
from doccontrol.interfaces.api.app import ApiResources, create_app
from doccontrol.interfaces.api.middleware.auth import AuthMiddleware
from doccontrol.interfaces.api.middleware.cors import CORSMiddleware
from doccontrol.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from doccontrol.interfaces.api.resources.access import AccessGrantResource, AccessResource
from doccontrol.interfaces.api.resources.activities import ActivitiesResource
from doccontrol.interfaces.api.resources.comments import CommentsResource
from doccontrol.interfaces.api.resources.documents import DocumentResource, DocumentsResource
from doccontrol.interfaces.api.resources.expiry import ExpiryResource
from doccontrol.interfaces.api.resources.health import HealthResource
from doccontrol.interfaces.api.resources.lifecycle import TransitionResource
from doccontrol.interfaces.api.resources.locking import LockResource
from doccontrol.interfaces.api.resources.versions import VersionResource, VersionsResource
from doccontrol.interfaces.worker.expiry_sweeper import ExpirySweeper
from doccontrol.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_notification_sink(settings: Settings) -> NotificationSink:
    if settings.notification_webhook_url:
        return WebhookNotificationSink(settings.notification_webhook_url)
    return LoggingNotificationSink()


def create_doccontrol_app(settings: Settings | None = None) -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak is not configured; callers are identified by X-User-Id")

    blob_store = HttpBlobStore(
        settings.storage_url,
        settings.storage_bucket,
        service_key=settings.storage_service_key,
    )
    sink = create_notification_sink(settings)
    resources = build_api_resources(
        settings,
        uow_factory,
        GrantPermissionChecker(uow_factory),
        blob_store,
        SystemClock(),
        sink,
        database_check=lambda: ping(pool),
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    closables = [blob_store] + ([sink] if isinstance(sink, WebhookNotificationSink) else [])
    return create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool, closables),
            AuthMiddleware(keycloak),
        ],
    )


def build_api_resources(
    settings: Settings,
    uow_factory: UnitOfWorkFactory,
    permission_checker: PermissionChecker,
    blob_store: BlobStore,
    clock: Clock,
    sink: NotificationSink,
    database_check: Callable[[], Awaitable[bool]] | None = None,
) -> ApiResources:
    """Wire use cases to resources over the given adapters."""
    state_machine = LifecycleStateMachine(publish_on_approval=settings.publish_on_approval)
    lease = settings.lock_lease
    storage_retry = {
        "storage_max_attempts": settings.storage_max_attempts,
        "storage_backoff_seconds": settings.storage_retry_backoff_seconds,
    }

    def transition(use_case_cls: type, comment_field: str = "comment") -> TransitionResource:
        use_case = use_case_cls(
            uow_factory,
            permission_checker,
            clock,
            state_machine=state_machine,
            notification_sink=sink,
            lock_lease=lease,
        )
        return TransitionResource(use_case, comment_field)

    return ApiResources(
        health=HealthResource(database_check),
        documents=DocumentsResource(
            ListDocumentsUseCase(uow_factory, clock),
            UploadDocumentUseCase(uow_factory, blob_store, clock, **storage_retry),
        ),
        document=DocumentResource(
            GetDocumentUseCase(uow_factory, permission_checker, clock),
            EditMetadataUseCase(uow_factory, permission_checker, clock, lock_lease=lease),
            DeleteDocumentUseCase(uow_factory, permission_checker, clock, lock_lease=lease),
        ),
        transitions={
            "submit": transition(SubmitForApprovalUseCase),
            "approve": transition(ApproveDocumentUseCase),
            "reject": transition(RejectDocumentUseCase, comment_field="reason"),
            "publish": transition(PublishDocumentUseCase),
            "archive": transition(ArchiveDocumentUseCase),
            "reopen": transition(ReopenDocumentUseCase),
        },
        lock=LockResource(
            CheckoutDocumentUseCase(uow_factory, permission_checker, clock, lock_lease=lease),
            CheckinDocumentUseCase(uow_factory, blob_store, clock, **storage_retry),
            ForceUnlockUseCase(uow_factory, permission_checker, clock),
        ),
        versions=VersionsResource(ListVersionsUseCase(uow_factory, permission_checker)),
        version=VersionResource(
            RevertToVersionUseCase(uow_factory, permission_checker, clock, lock_lease=lease),
            GetDownloadUrlUseCase(
                uow_factory,
                permission_checker,
                blob_store,
                ttl_seconds=settings.signed_url_ttl_seconds,
            ),
        ),
        expiry=ExpiryResource(
            SetExpirySettingsUseCase(uow_factory, permission_checker, clock, lock_lease=lease)
        ),
        access=AccessResource(
            ListAccessUseCase(uow_factory, permission_checker),
            GrantAccessUseCase(uow_factory, permission_checker, clock),
        ),
        access_grant=AccessGrantResource(
            RevokeAccessUseCase(uow_factory, permission_checker, clock)
        ),
        activities=ActivitiesResource(ListActivitiesUseCase(uow_factory, permission_checker)),
        comments=CommentsResource(
            ListCommentsUseCase(uow_factory, permission_checker),
            AddCommentUseCase(uow_factory, permission_checker, clock),
        ),
    )


def run_server(settings: Settings | None = None) -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = settings or get_settings()
    app = create_doccontrol_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


async def run_sweeper(settings: Settings | None = None, once: bool = False) -> None:
    """Run the expiry sweeper against its own connection pool."""
    settings = settings or get_settings()
    pool = create_pool(settings.database_url, min_size=1, max_size=2)
    sink = create_notification_sink(settings)
    sweep = ExpirySweepUseCase(
        create_uow_factory(pool),
        SystemClock(),
        notification_sink=sink,
        default_schedule=settings.default_schedule,
        state_machine=LifecycleStateMachine(publish_on_approval=settings.publish_on_approval),
    )
    sweeper = ExpirySweeper(sweep, settings.expiry_sweep_interval_seconds)
    await pool.open()
    try:
        if once:
            await sweeper.run_once()
            return
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, sweeper.stop)
        await sweeper.run_forever()
    finally:
        if isinstance(sink, WebhookNotificationSink):
            await sink.close()
        await pool.close()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: doccontrol [serve | sweep [--once] | version]."""
    parser = argparse.ArgumentParser(prog="doccontrol", description="Document control service")
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("serve", help="Run the REST API")
    sweep = commands.add_parser("sweep", help="Run the expiry sweeper")
    sweep.add_argument("--once", action="store_true", help="Sweep once and exit")
    commands.add_parser("version", help="Print the version")
    args = parser.parse_args(argv)

    if args.command == "version":
        print(f"doccontrol v{__version__}")
        return

    settings = get_settings()
    configure_logging(settings.log_level)
    if args.command == "sweep":
        asyncio.run(run_sweeper(settings, once=args.once))
    else:
        run_server(settings)


def sweeper_main() -> None:
    main(["sweep"])
