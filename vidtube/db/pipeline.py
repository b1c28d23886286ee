"""Composable query pipelines.

A pipeline collects the stages of a listing query and renders them in a fixed
order: match, enrich, compute, project, sort. Enrichment follows many-to-one
relationships with joins and eager-loads the related row onto the entity;
computed fields are correlated scalar subqueries labelled onto each result row.

    pipeline = (
        QueryPipeline(Video, sortable=("created_at", "views"))
        .match(Video.is_published.is_(True))
        .enrich(Video.owner, fields=OWNER_FIELDS)
        .compute("total_likes", related_count(Like.video_id, Video.id))
        .sort("views", "asc")
    )
    rows = (await db.execute(pipeline.statement())).all()
"""
from sqlalchemy import ColumnElement, Select, asc, desc, func, inspect, or_, select
from sqlalchemy.orm import contains_eager, load_only


class InvalidSortField(ValueError):
    pass


def related_count(foreign_key, local_key) -> ColumnElement:
    """Count rows whose ``foreign_key`` points at ``local_key`` of the outer row.

    ``foreign_key`` may belong to an alias; counting is always done over its own
    entity, never correlated to the outer query.
    """
    source = foreign_key.parent.entity
    return (
        select(func.count())
        .select_from(source)
        .where(foreign_key == local_key)
        .correlate_except(source)
        .scalar_subquery()
    )


class QueryPipeline:
    def __init__(self, model, *, sortable: tuple[str, ...] = ("created_at",)):
        self.model = model
        self.sortable = sortable
        self._criteria: list[ColumnElement] = []
        self._enrichments: list[tuple[tuple, tuple, bool]] = []
        self._computed: dict[str, ColumnElement] = {}
        self._projection: tuple = ()
        self._order_by: list[ColumnElement] = []

    @property
    def computed_fields(self) -> tuple[str, ...]:
        return tuple(self._computed)

    def match(self, *criteria) -> "QueryPipeline":
        self._criteria.extend(c for c in criteria if c is not None)
        return self

    def search(self, text: str | None, *columns) -> "QueryPipeline":
        """Case-insensitive substring match of ``text`` against any of ``columns``."""
        text = (text or "").strip()
        if text:
            self._criteria.append(or_(*(column.icontains(text, autoescape=True) for column in columns)))
        return self

    def enrich(self, *path, fields: tuple = (), required: bool = True) -> "QueryPipeline":
        """Join along a chain of many-to-one relationships and load the last hop onto the result.

        Required enrichments are inner joins: a row whose related entity is
        missing is not part of the result.
        """
        self._enrichments.append((path, fields, required))
        return self

    def compute(self, name: str, expression: ColumnElement) -> "QueryPipeline":
        self._computed[name] = expression
        return self

    def project(self, *attributes) -> "QueryPipeline":
        self._projection = attributes
        return self

    def sort(self, field: str, direction: str | None = "desc") -> "QueryPipeline":
        """Order by a sortable column or computed field. Descending unless ``direction`` is "asc"."""
        if field in self._computed:
            key = self._computed[field]
        elif field in self.sortable:
            key = getattr(self.model, field)
        else:
            allowed = ", ".join((*self.sortable, *(f for f in self._computed if f not in self.sortable)))
            raise InvalidSortField(f"Cannot sort by '{field}'. Allowed: {allowed}")
        order = asc if direction == "asc" else desc
        # Primary key tie-breaker keeps pages disjoint when sort keys repeat
        tie_breakers = [order(column) for column in inspect(self.model).primary_key]
        self._order_by = [order(key), *tie_breakers]
        return self

    def _joined(self, stmt: Select) -> Select:
        for path, _fields, required in self._enrichments:
            for relationship in path:
                stmt = stmt.join(relationship) if required else stmt.outerjoin(relationship)
        return stmt

    def statement(self) -> Select:
        columns = [self.model, *(expr.label(name) for name, expr in self._computed.items())]
        stmt = self._joined(select(*columns))
        if self._criteria:
            stmt = stmt.where(*self._criteria)
        for path, fields, _required in self._enrichments:
            loader = contains_eager(path[0])
            for relationship in path[1:]:
                loader = loader.contains_eager(relationship)
            if fields:
                loader = loader.load_only(*fields)
            stmt = stmt.options(loader)
        if self._projection:
            stmt = stmt.options(load_only(*self._projection))
        if self._order_by:
            stmt = stmt.order_by(*self._order_by)
        return stmt

    def count_statement(self) -> Select:
        stmt = self._joined(select(func.count()).select_from(self.model))
        if self._criteria:
            stmt = stmt.where(*self._criteria)
        return stmt
