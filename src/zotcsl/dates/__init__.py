"""Date normalization between item date strings and CSL date objects."""

from zotcsl.dates.csl import (
    MONTH_FIRST_REGIONS,
    csl_date_to_field,
    csl_to_multipart,
    date_to_csl,
    item_date_to_csl,
    locale_region,
    month_first_for_locale,
    parse_date_to_array,
)
from zotcsl.dates.multipart import (
    MultipartDate,
    access_date_to_local,
    date_to_sql,
    datetime_to_sql,
    format_date,
    is_multipart,
    is_sql_date,
    multipart_to_sql,
    multipart_to_str,
    sql_to_datetime,
    str_to_date,
    str_to_multipart,
)

__all__ = [
    "MONTH_FIRST_REGIONS",
    "MultipartDate",
    "access_date_to_local",
    "csl_date_to_field",
    "csl_to_multipart",
    "date_to_csl",
    "date_to_sql",
    "datetime_to_sql",
    "format_date",
    "is_multipart",
    "is_sql_date",
    "item_date_to_csl",
    "locale_region",
    "month_first_for_locale",
    "multipart_to_sql",
    "multipart_to_str",
    "parse_date_to_array",
    "sql_to_datetime",
    "str_to_date",
    "str_to_multipart",
]
