from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set, Tuple
from uuid import UUID

from sqlalchemy import and_, delete, func, select
from sqlalchemy.exc import IntegrityError as DBIntegrityError
from sqlalchemy.orm import Session

from roster.common.iter import chunked
from roster.common.logging import get_logger
from roster.common.settings import get_settings
from roster.database.core.transaction import transactional
from roster.database.models.catalog import Course, Student
from roster.database.models.enrollment import Enrollment
from roster.database.repos._mapping import to_domain_link
from roster.domain.dataclasses.reports import SyncReport
from roster.domain.dataclasses.sync import SyncPlan
from roster.domain.entities.links.association_link import AssociationLink
from roster.domain.enums import DeletePolicy, EnrollmentRole, LinkPolicy, Side
from roster.domain.errors import ConflictError, IntegrityError, NotFoundError
from roster.domain.policies.sync_planner import plan_sync, plan_toggle

logger = get_logger(__name__)


@dataclass(frozen=True)
class AssociationSpec:
    """
    Describes one many-to-many association:
      left_model  <-- link_model(left_key, right_key, *metadata_fields) --> right_model
    Both entity models must expose an `id` primary key.
    `coercers` turn raw metadata values (e.g. from JSON) into column types.
    """
    name: str
    left_model: type
    right_model: type
    link_model: type
    left_key: str
    right_key: str
    metadata_fields: Tuple[str, ...] = ()
    coercers: Mapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    @property
    def left_col(self):
        return getattr(self.link_model, self.left_key)

    @property
    def right_col(self):
        return getattr(self.link_model, self.right_key)

    def key_col(self, side: Side):
        return self.left_col if side == Side.left else self.right_col

    def entity_model(self, side: Side) -> type:
        return self.left_model if side == Side.left else self.right_model


ENROLLMENTS = AssociationSpec(
    name="enrollment",
    left_model=Student,
    right_model=Course,
    link_model=Enrollment,
    left_key="student_id",
    right_key="course_id",
    metadata_fields=("role", "note", "meta_data"),
    coercers={"role": EnrollmentRole},
)


class AssociationManager:
    """
    Maintains link records between two entity collections.

    Single-pair writes only flush; the caller owns the transaction.
    `synchronize` and `toggle` run inside `transactional()` so they either
    fully apply or leave the prior state untouched. That is a SAVEPOINT when
    the session already has a transaction open, and a commit of its own
    otherwise.
    """

    def __init__(
        self,
        session: Session,
        spec: AssociationSpec = ENROLLMENTS,
        *,
        link_policy: LinkPolicy | str | None = None,
    ) -> None:
        self.db = session
        self.spec = spec
        self.cfg = get_settings().associations
        self.link_policy = LinkPolicy(link_policy or self.cfg.link_policy)

    # -------- existence checks --------

    def require_entity(self, side: Side, entity_id: UUID, *, lock: bool = False) -> Any:
        model = self.spec.entity_model(side)
        if lock:
            # FOR UPDATE serializes concurrent writers on the same entity (no-op on SQLite)
            stmt = select(model).where(model.id == entity_id).with_for_update()
            obj = self.db.execute(stmt).scalars().first()
        else:
            obj = self.db.get(model, entity_id)
        if obj is None:
            raise NotFoundError(model.__name__, entity_id)
        return obj

    def _require_all_right(self, ids: Iterable[UUID]) -> None:
        wanted = set(ids)
        if not wanted:
            return
        model = self.spec.right_model
        found: Set[UUID] = set()
        for chunk in chunked(sorted(wanted, key=str), self.cfg.in_clause_chunk):
            found.update(self.db.execute(select(model.id).where(model.id.in_(chunk))).scalars().all())
        missing = sorted(wanted - found, key=str)
        if missing:
            raise NotFoundError(
                model.__name__,
                missing[0],
                f"{model.__name__} not found: {', '.join(str(m) for m in missing)}",
            )

    def _clean_metadata(self, metadata: Mapping[str, Any]) -> Dict[str, Any]:
        unknown = set(metadata) - set(self.spec.metadata_fields)
        if unknown:
            raise ValueError(f"Unknown {self.spec.name} metadata: {', '.join(sorted(unknown))}")
        out: Dict[str, Any] = {}
        for k, v in metadata.items():
            if v is None:
                continue
            coerce = self.spec.coercers.get(k)
            out[k] = coerce(v) if coerce else v
        return out

    def _pair(self, left_id: UUID, right_id: UUID):
        return and_(self.spec.left_col == left_id, self.spec.right_col == right_id)

    # -------- reads --------

    def get_link(self, left_id: UUID, right_id: UUID) -> Optional[Any]:
        stmt = select(self.spec.link_model).where(self._pair(left_id, right_id)).limit(1)
        return self.db.execute(stmt).scalars().first()

    def exists(self, left_id: UUID, right_id: UUID) -> bool:
        return self.get_link(left_id, right_id) is not None

    def current_ids(self, left_id: UUID) -> Set[UUID]:
        stmt = select(self.spec.right_col).where(self.spec.left_col == left_id)
        return set(self.db.execute(stmt).scalars().all())

    def left_ids_for(self, right_id: UUID) -> Set[UUID]:
        stmt = select(self.spec.left_col).where(self.spec.right_col == right_id)
        return set(self.db.execute(stmt).scalars().all())

    def list_links(
        self,
        *,
        left_id: Optional[UUID] = None,
        right_id: Optional[UUID] = None,
    ) -> List[AssociationLink]:
        link = self.spec.link_model
        stmt = select(link)
        if left_id is not None:
            stmt = stmt.where(self.spec.left_col == left_id)
        if right_id is not None:
            stmt = stmt.where(self.spec.right_col == right_id)
        stmt = stmt.order_by(link.date_created.asc(), self.spec.left_col.asc(), self.spec.right_col.asc())
        return [
            to_domain_link(
                row,
                left_key=self.spec.left_key,
                right_key=self.spec.right_key,
                metadata_fields=self.spec.metadata_fields,
            )
            for row in self.db.execute(stmt).scalars().all()
        ]

    def batch_right_ids(self, left_ids: Iterable[UUID]) -> Dict[UUID, Set[UUID]]:
        """
        Map of left_id -> {right_id} for many left entities at once.
        Every requested id is present in the result (possibly with an empty set).
        """
        ids = list(dict.fromkeys(left_ids))
        out: Dict[UUID, Set[UUID]] = {i: set() for i in ids}
        for chunk in chunked(ids, self.cfg.in_clause_chunk):
            stmt = select(self.spec.left_col, self.spec.right_col).where(self.spec.left_col.in_(chunk))
            for lid, rid in self.db.execute(stmt).all():
                out[lid].add(rid)
        return out

    def count_for(self, side: Side, entity_id: UUID) -> int:
        col = self.spec.key_col(Side(side))
        stmt = select(func.count()).select_from(self.spec.link_model).where(col == entity_id)
        return int(self.db.execute(stmt).scalar_one())

    # -------- single-pair mutations --------

    def link(self, left_id: UUID, right_id: UUID, **metadata: Any) -> Any:
        return self.get_or_link(left_id, right_id, **metadata)[0]

    def get_or_link(self, left_id: UUID, right_id: UUID, **metadata: Any) -> Tuple[Any, bool]:
        """Like `link`, but also says whether a new record was created."""
        values = self._clean_metadata(metadata)
        self.require_entity(Side.left, left_id)
        self.require_entity(Side.right, right_id)

        existing = self.get_link(left_id, right_id)
        if existing is None:
            row = self._insert_once(left_id, right_id, values)
            if row is not None:
                logger.debug("%s (%s, %s) linked", self.spec.name, left_id, right_id)
                return row, True
            # a concurrent writer linked the pair first
            existing = self.get_link(left_id, right_id)

        if self.link_policy == LinkPolicy.reject:
            raise ConflictError(
                self.spec.name,
                (left_id, right_id),
                f"{self.spec.name} ({left_id}, {right_id}) already exists",
            )
        if self.link_policy == LinkPolicy.update and values:
            for k, v in values.items():
                setattr(existing, k, v)
            self.db.flush()
            logger.debug("%s (%s, %s) metadata updated: %s", self.spec.name, left_id, right_id, sorted(values))
        return existing, False

    def _insert_once(self, left_id: UUID, right_id: UUID, values: Mapping[str, Any]) -> Optional[Any]:
        """Insert under a SAVEPOINT; None if the unique pair constraint fired."""
        try:
            with self.db.begin_nested():
                row = self._insert(left_id, right_id, values)
        except DBIntegrityError:
            logger.debug("%s (%s, %s) already linked by another writer", self.spec.name, left_id, right_id)
            return None
        return row

    def unlink(self, left_id: UUID, right_id: UUID) -> bool:
        res = self.db.execute(delete(self.spec.link_model).where(self._pair(left_id, right_id)))
        removed = bool(res.rowcount)
        if removed:
            logger.debug("%s (%s, %s) unlinked", self.spec.name, left_id, right_id)
        return removed

    def update_metadata(self, left_id: UUID, right_id: UUID, **metadata: Any) -> Any:
        values = self._clean_metadata(metadata)
        row = self.get_link(left_id, right_id)
        if row is None:
            raise NotFoundError(self.spec.name, (left_id, right_id))
        for k, v in values.items():
            setattr(row, k, v)
        self.db.flush()
        return row

    # -------- set mutations --------

    def synchronize(
        self,
        left_id: UUID,
        target_ids: Iterable[UUID],
        *,
        detaching: bool = True,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> SyncReport:
        """
        Make current_ids(left_id) == target_ids (or a superset when detaching=False)
        with the minimal number of unlink/link operations, atomically.
        `metadata` is applied to newly created links only.
        """
        target = frozenset(target_ids)
        values = self._clean_metadata(metadata or {})

        report = SyncReport(left_id=left_id)
        report.start()
        with transactional(self.db):
            self.require_entity(Side.left, left_id, lock=True)
            plan = plan_sync(self.current_ids(left_id), target, detaching=detaching)
            self._require_all_right(plan.to_add)
            self._apply(left_id, plan, values)
        report.stop()

        self._fill(report, plan)
        logger.info(
            "%s sync for %s: +%d -%d =%d",
            self.spec.name, left_id, len(plan.to_add), len(plan.to_remove), len(plan.unchanged),
        )
        return report

    def toggle(self, left_id: UUID, ids: Iterable[UUID], **metadata: Any) -> SyncReport:
        values = self._clean_metadata(metadata)

        report = SyncReport(left_id=left_id)
        report.start()
        with transactional(self.db):
            self.require_entity(Side.left, left_id, lock=True)
            plan = plan_toggle(self.current_ids(left_id), ids)
            self._require_all_right(plan.to_add)
            self._apply(left_id, plan, values)
        report.stop()

        self._fill(report, plan)
        logger.info("%s toggle for %s: +%d -%d", self.spec.name, left_id, len(plan.to_add), len(plan.to_remove))
        return report

    def _apply(self, left_id: UUID, plan: SyncPlan, values: Mapping[str, Any]) -> None:
        # unlinks first, then links
        for chunk in chunked(sorted(plan.to_remove, key=str), self.cfg.in_clause_chunk):
            self.db.execute(
                delete(self.spec.link_model).where(
                    self.spec.left_col == left_id,
                    self.spec.right_col.in_(chunk),
                )
            )
        for right_id in sorted(plan.to_add, key=str):
            self._insert(left_id, right_id, values)
        self.db.flush()

    def _insert(self, left_id: UUID, right_id: UUID, values: Mapping[str, Any]) -> Any:
        row = self.spec.link_model(**{self.spec.left_key: left_id, self.spec.right_key: right_id}, **values)
        self.db.add(row)
        return row

    @staticmethod
    def _fill(report: SyncReport, plan: SyncPlan) -> None:
        report.to_add = frozenset(plan.to_add)
        report.to_remove = frozenset(plan.to_remove)
        report.unchanged = frozenset(plan.unchanged)

    # -------- entity deletion support --------

    def detach_all(self, side: Side, entity_id: UUID) -> int:
        col = self.spec.key_col(Side(side))
        res = self.db.execute(delete(self.spec.link_model).where(col == entity_id))
        return int(res.rowcount or 0)

    def prepare_delete(self, side: Side, entity_id: UUID, policy: DeletePolicy | str | None = None) -> int:
        """
        Apply the delete policy for an entity about to be removed.
        cascade: drop its associations, return how many were removed.
        reject:  raise IntegrityError if any association still references it.
        """
        side = Side(side)
        policy = DeletePolicy(policy or self.cfg.delete_policy)
        kind = self.spec.entity_model(side).__name__

        if policy == DeletePolicy.reject:
            active = self.count_for(side, entity_id)
            if active:
                raise IntegrityError(kind, entity_id, active)
            return 0

        removed = self.detach_all(side, entity_id)
        if removed:
            logger.info("cascade: removed %d %s link(s) of %s %s", removed, self.spec.name, kind, entity_id)
        return removed
