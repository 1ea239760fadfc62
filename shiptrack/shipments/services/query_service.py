"""
Query service for the admin shipment listing.

Translates query parameters into an ORM query:

    ?status[gte]=in-transit&source.city=Lagos&sort=-amount,createdAt
        &select=trackingId,status&page=2&limit=10
        &startDate=2024-01-01&endDate=2024-01-31&trackingId=1A2B3C4D

Filter keys are parsed structurally (``field`` or ``field[operator]``) and
mapped to Django lookups from a fixed field table; nothing is rewritten
textually.
"""

import re
from datetime import datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional

from django.db.models import Q, QuerySet
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from shiptrack.exceptions import ValidationException

RESERVED_PARAMS = ('select', 'sort', 'page', 'limit', 'startDate', 'endDate', 'trackingId')

COMPARISON_OPERATORS = frozenset({'gt', 'gte', 'lt', 'lte', 'in'})

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
DEFAULT_ORDERING = ['-created_at']

FILTER_KEY_PATTERN = re.compile(r'^(?P<field>[A-Za-z_][\w.]*)(?:\[(?P<operator>\w+)\])?$')


def _to_decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise ValueError(value)


def _to_datetime(value: str) -> datetime:
    parsed = parse_datetime(value)
    if parsed is None:
        day = parse_date(value)
        if day is None:
            raise ValueError(value)
        parsed = datetime.combine(day, time.min)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


class QueryField:
    """A filterable and sortable field: wire name -> ORM path plus a value cast."""

    def __init__(self, path: str, cast: Callable[[str], Any] = str):
        self.path = path
        self.cast = cast


SHIPMENT_QUERY_FIELDS: Dict[str, QueryField] = {
    'status': QueryField('status'),
    'paymentStatus': QueryField('payment_status'),
    'shipmentType': QueryField('shipment_type'),
    'amount': QueryField('amount', _to_decimal),
    'user': QueryField('user_id', int),
    'createdAt': QueryField('created_at', _to_datetime),
    'updatedAt': QueryField('updated_at', _to_datetime),
    'packageDetails.weight': QueryField('package_details__weight', float),
    'packageDetails.description': QueryField('package_details__description'),
    'packageDetails.dimensions.length': QueryField('package_details__dimensions__length', float),
    'packageDetails.dimensions.width': QueryField('package_details__dimensions__width', float),
    'packageDetails.dimensions.height': QueryField('package_details__dimensions__height', float),
}

for _prefix, _column in (('source', 'source'), ('destination', 'destination')):
    for _key in ('address', 'city', 'state', 'country'):
        SHIPMENT_QUERY_FIELDS[f'{_prefix}.{_key}'] = QueryField(f'{_column}__{_key}')


def _positive_int(value: Optional[str], default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


class ShipmentPage:
    """One page of results plus the pagination links around it."""

    def __init__(self, results: List[Any], total: int, page: int, limit: int, fields: Optional[List[str]] = None):
        self.results = results
        self.total = total
        self.page = page
        self.limit = limit
        self.fields = fields

    @property
    def count(self) -> int:
        return len(self.results)

    @property
    def pagination(self) -> Dict[str, Dict[str, int]]:
        start_index = (self.page - 1) * self.limit
        end_index = self.page * self.limit
        pagination = {}

        if end_index < self.total:
            pagination['next'] = {'page': self.page + 1, 'limit': self.limit}

        if start_index > 0:
            pagination['prev'] = {'page': self.page - 1, 'limit': self.limit}

        return pagination


class ShipmentQuery:
    """
    Parsed admin listing request.

    Build with ``ShipmentQuery.from_params(request.query_params)`` and run
    with ``apply(queryset)``. Parsing raises ``ValidationException`` for
    unknown fields, unsupported operators and values that do not cast.
    """

    def __init__(self, filters: Q, ordering: List[str], fields: Optional[List[str]],
                 page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT):
        self.filters = filters
        self.ordering = ordering
        self.fields = fields
        self.page = page
        self.limit = limit

    @classmethod
    def from_params(cls, params) -> 'ShipmentQuery':
        filters = cls.parse_filters(params)
        filters &= cls.parse_refinements(params)

        return cls(
            filters=filters,
            ordering=cls.parse_ordering(params.get('sort')),
            fields=cls.parse_select(params.get('select')),
            page=_positive_int(params.get('page'), DEFAULT_PAGE),
            limit=_positive_int(params.get('limit'), DEFAULT_LIMIT),
        )

    @staticmethod
    def parse_filters(params) -> Q:
        """Turn every non-reserved parameter into a typed lookup."""
        filters = Q()

        for key in params.keys():
            if key in RESERVED_PARAMS:
                continue

            match = FILTER_KEY_PATTERN.match(key)
            if not match:
                raise ValidationException(f"Invalid filter parameter '{key}'")

            name = match.group('field')
            operator = match.group('operator')
            field = SHIPMENT_QUERY_FIELDS.get(name)
            if field is None:
                raise ValidationException(f"Cannot filter shipments by '{name}'")

            raw_value = params.get(key)
            if operator is None:
                filters &= Q(**{field.path: _cast(field, name, raw_value)})
                continue

            if operator not in COMPARISON_OPERATORS:
                raise ValidationException(f"Unsupported filter operator '{operator}' on '{name}'")

            if operator == 'in':
                values = [_cast(field, name, item.strip()) for item in raw_value.split(',') if item.strip()]
                filters &= Q(**{f'{field.path}__in': values})
            else:
                filters &= Q(**{f'{field.path}__{operator}': _cast(field, name, raw_value)})

        return filters

    @staticmethod
    def parse_refinements(params) -> Q:
        """Creation date range (inclusive) and exact tracking id."""
        refinements = Q()

        for param, operator in (('startDate', 'gte'), ('endDate', 'lte')):
            value = params.get(param)
            if not value:
                continue
            try:
                day = parse_date(value)
                parsed = None if day else parse_datetime(value)
            except ValueError:
                raise ValidationException(f"Invalid {param} '{value}'")

            if day is not None:
                # A bare date covers the whole calendar day
                refinements &= Q(**{f'created_at__date__{operator}': day})
                continue
            if parsed is None:
                raise ValidationException(f"Invalid {param} '{value}'")
            if timezone.is_naive(parsed):
                parsed = timezone.make_aware(parsed)
            refinements &= Q(**{f'created_at__{operator}': parsed})

        tracking_id = params.get('trackingId')
        if tracking_id:
            refinements &= Q(tracking_id=tracking_id)

        return refinements

    @staticmethod
    def parse_ordering(sort: Optional[str]) -> List[str]:
        if not sort:
            return list(DEFAULT_ORDERING)

        ordering = []
        for item in sort.split(','):
            item = item.strip()
            if not item:
                continue
            descending = item.startswith('-')
            name = item.lstrip('-')
            field = SHIPMENT_QUERY_FIELDS.get(name)
            if field is None:
                raise ValidationException(f"Cannot sort shipments by '{name}'")
            ordering.append(f"-{field.path}" if descending else field.path)

        return ordering or list(DEFAULT_ORDERING)

    @staticmethod
    def parse_select(select: Optional[str]) -> Optional[List[str]]:
        if not select:
            return None
        return [name.strip() for name in select.split(',') if name.strip()]

    def apply(self, queryset: QuerySet) -> ShipmentPage:
        """Filter, count, sort and slice ``queryset``."""
        queryset = queryset.filter(self.filters)
        total = queryset.count()

        start_index = (self.page - 1) * self.limit
        end_index = self.page * self.limit
        results = list(queryset.order_by(*self.ordering)[start_index:end_index])

        return ShipmentPage(results, total, self.page, self.limit, self.fields)


def _cast(field: QueryField, name: str, value: str):
    try:
        return field.cast(value)
    except (TypeError, ValueError):
        raise ValidationException(f"Invalid value '{value}' for '{name}'")
