from sqlalchemy import BigInteger, Column, Integer, MetaData, String, Table, Text

metadata = MetaData()

repos_table = Table(
    "repos",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("owner", String(100)),
    Column("name", String(100)),
    Column("category", String(100)),
    Column("description", Text),
    Column("html_url", String(255)),
    Column("homepage", String(255)),
    Column("topics", Text),
    Column("created_at", String(10)),     # YYYY-MM-DD
    Column("updated_at", String(10)),
    Column("uid", BigInteger),            # GitHub repository id
)

# every column except the generated key, in snapshot order
RECORD_COLUMNS = [c.name for c in repos_table.columns if c.name != "id"]
