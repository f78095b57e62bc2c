from typing import List

# Registration order is significant: binding stops at the first missing file.
TPCH_TABLES: List[str] = [
    "customer",
    "lineitem",
    "nation",
    "orders",
    "part",
    "partsupp",
    "region",
    "supplier",
]

FIRST_QUERY = 1
LAST_QUERY = 22

QUERY_NUMBERS = range(FIRST_QUERY, LAST_QUERY + 1)

STATEMENT_SEPARATOR = ";"
