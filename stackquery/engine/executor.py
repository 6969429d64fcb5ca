"""Execution of scan and get requests against the table registry."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from stackquery.client.resolver import ClientResolver
from stackquery.client.session import SessionFactory
from stackquery.core.exceptions import MissingQualifierError, StackQueryError
from stackquery.core.metrics import ScanMetrics
from stackquery.engine.fetcher import get_by_key
from stackquery.engine.lister import list_entities
from stackquery.engine.streamer import CancelSignal, RowSink, stream
from stackquery.engine.translator import PredicateSet, Scalar, translate
from stackquery.models.connection_config import (
    DEFAULT_IGNORE_ERROR_SUBSTRINGS,
    ConnectionConfig,
)
from stackquery.tables.descriptor import EntityDescriptor
from stackquery.tables.projection import Projector, Row, RowProjector
from stackquery.tables.registry import DescriptorRegistry

logger = logging.getLogger(__name__)

ProjectorFactory = Callable[[EntityDescriptor], Projector]


@dataclass
class ScanRequest:
    """One table scan issued by the host."""

    entity_kind: str
    sink: RowSink
    predicates: PredicateSet = field(default_factory=dict)
    cancel: Optional[CancelSignal] = None
    region: str = ""


@dataclass
class GetRequest:
    """One point lookup issued by the host."""

    entity_kind: str
    key: Scalar
    region: str = ""


class QueryExecutor:
    """Runs scans and gets for every table in a registry.

    Each request gets its own ClientResolver, so clients are shared within
    a request and never across requests.

    Example:
        executor = QueryExecutor(build_default_registry(), KeystoneSessionFactory(config), config)
        executor.scan(ScanRequest("openstack_subnet", rows.append, {"name": "web-01"}))
    """

    def __init__(
        self,
        registry: DescriptorRegistry,
        session_factory: SessionFactory,
        config: Optional[ConnectionConfig] = None,
        projector_factory: ProjectorFactory = RowProjector,
    ):
        self._registry = registry
        self._session_factory = session_factory
        self._config = config
        self._projector_factory = projector_factory

    def scan(self, request: ScanRequest) -> ScanMetrics:
        """List a table and stream its rows to the request's sink.

        Returns:
            Metrics for the scan.

        Raises:
            UnknownTableError: If the table is not registered.
            MissingQualifierError: If a required predicate is absent.
            ResolutionError: If no client can be obtained.
            ListError: If a page fetch fails; earlier rows were delivered.
        """
        descriptor = self._registry.get(request.entity_kind)
        metrics = ScanMetrics(descriptor.resource_kind)
        options = translate(descriptor, request.predicates)
        self._check_required(descriptor, options)

        logger.debug(
            "Starting scan",
            extra={
                "table": descriptor.resource_kind,
                "context": {"region": request.region or "<default>"},
            },
        )
        try:
            with self.resolver() as resolver:
                client = resolver.resolve(descriptor.service, request.region)
                entities = list_entities(
                    client,
                    descriptor,
                    options,
                    page_size=self._config.page_size if self._config else None,
                    on_page=metrics.record_page,
                )
                stream(
                    entities,
                    self._projector(descriptor),
                    request.sink,
                    request.cancel,
                    on_row=metrics.record_row,
                    on_cancel=metrics.record_cancel,
                )
        except StackQueryError as e:
            metrics.record_error(e, {"rows_emitted": metrics.rows_emitted})
            raise
        finally:
            metrics.finish()
            logger.debug(metrics.get_summary(), extra={"table": descriptor.resource_kind})

        return metrics

    def get(self, request: GetRequest) -> Optional[dict[str, Any]]:
        """Fetch one raw entity by key.

        Returns:
            The entity, or None when it does not exist.

        Raises:
            UnknownTableError: If the table is not registered.
            ResolutionError: If no client can be obtained.
            FetchError: For any failure other than absence.
        """
        descriptor = self._registry.get(request.entity_kind)
        with self.resolver() as resolver:
            client = resolver.resolve(descriptor.service, request.region)
            return get_by_key(
                client,
                descriptor,
                request.key,
                ignore_errors=self._ignore_errors(descriptor),
            )

    def get_row(self, request: GetRequest) -> Optional[Row]:
        """Fetch one entity by key and project it to a row."""
        entity = self.get(request)
        if entity is None:
            return None
        descriptor = self._registry.get(request.entity_kind)
        return self._projector(descriptor).project(entity)

    def resolver(self) -> ClientResolver:
        """Create a fresh ClientResolver for one request."""
        default_region = self._config.region if self._config else ""
        return ClientResolver(self._session_factory, default_region)

    def _projector(self, descriptor: EntityDescriptor) -> Projector:
        return self._projector_factory(descriptor)

    def _ignore_errors(self, descriptor: EntityDescriptor) -> list[str]:
        if self._config is None:
            return list(DEFAULT_IGNORE_ERROR_SUBSTRINGS)
        return self._config.ignore_errors_for(descriptor.resource_kind)

    @staticmethod
    def _check_required(descriptor: EntityDescriptor, options: Any) -> None:
        missing = [
            column_name
            for column_name in descriptor.required_columns
            if getattr(options, descriptor.filterable_columns[column_name]) in (None, "")
        ]
        if missing:
            raise MissingQualifierError(
                f"Table '{descriptor.resource_kind}' requires an equality predicate on {missing}",
                context={"table": descriptor.resource_kind, "missing": ", ".join(missing)},
            )

