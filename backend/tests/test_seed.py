from sqlalchemy import func, select

from stockroom.models import Sku, Transaction
from stockroom.seed import SAMPLE_SKUS, SAMPLE_TRANSACTIONS, main, seed


def test_seed_loads_catalog_once(database):
    assert seed(database) == len(SAMPLE_SKUS)
    assert seed(database) == 0

    s = database.session()
    try:
        assert s.scalar(select(func.count(Sku.id))) == len(SAMPLE_SKUS)
        assert s.scalar(select(func.count(Transaction.id))) == len(SAMPLE_TRANSACTIONS)

        # 120 on hand, +50 purchase, -20 sale
        tile = s.scalars(select(Sku).where(Sku.name == "Ceramic Floor Tile 2x2 White")).one()
        assert tile.current_quantity == 150
    finally:
        s.close()


def test_seed_reset(database):
    seed(database)
    assert seed(database, reset=True) == len(SAMPLE_SKUS)


def test_main_accepts_database_url(tmp_path, capsys):
    url = f"sqlite:///{tmp_path / 'seeded.db'}"

    main(["--database-url", url])

    out = capsys.readouterr().out
    assert "Inserted 14 sample SKUs" in out
    assert "Database seeded" in out
