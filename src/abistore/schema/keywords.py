"""SQL keywords that cannot be used as bare identifiers.

Union of SQLite's keyword list (https://www.sqlite.org/lang_keywords.html)
and DuckDB's `reserved` and `type_function` keywords
(`SELECT keyword_name FROM duckdb_keywords()`) as of DuckDB 1.5, all
lowercase. Newer engines can reserve more words; the test suite checks this
list against the installed engine.
"""

SQLITE_KEYWORDS = frozenset(
    """
    abort action add after all alter always analyze and as asc attach
    autoincrement before begin between by cascade case cast check collate
    column commit conflict constraint create cross current current_date
    current_time current_timestamp database default deferrable deferred
    delete desc detach distinct do drop each else end escape except exclude
    exclusive exists explain fail filter first following for foreign from
    full generated glob group groups having if ignore immediate in index
    indexed initially inner insert instead intersect into is isnull join key
    last left like limit match materialized natural no not nothing notnull
    null nulls of offset on or order others outer over partition plan pragma
    preceding primary query raise range recursive references regexp reindex
    release rename replace restrict returning right rollback row rows
    savepoint select set table temp temporary then ties to transaction
    trigger unbounded union unique update using vacuum values view virtual
    when where window with without
    """.split()
)

DUCKDB_KEYWORDS = frozenset(
    """
    all analyse analyze and any array as asc asymmetric at both case cast check
    collate column constraint create default deferrable desc describe
    distinct do else end except false fetch for foreign from grant group
    having in initially intersect into lambda lateral leading limit not null offset
    on only or order pivot pivot_longer pivot_wider placing primary qualify
    references returning select show some summarize symmetric table then to
    trailing true union unique unpack unpivot using variadic when where window with
    anti asof authorization binary collation columns concurrently cross freeze full
    generated glob ilike inner is isnull join left like map natural notnull
    outer overlaps positional right semi similar struct tablesample try_cast
    verbose
    """.split()
)

SQL_KEYWORDS = SQLITE_KEYWORDS | DUCKDB_KEYWORDS
