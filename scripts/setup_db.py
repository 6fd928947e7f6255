from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from core.config import settings
from core.logging import configure_logging, logger
from services.persistence.mongo import (
    MongoAdminStore,
    MongoRecordStore,
    ensure_indexes,
    get_database,
)
from services.persistence.seed import create_default_admin, create_sample_data


def main() -> None:
    configure_logging()
    db = get_database()
    ensure_indexes(db)

    create_default_admin(
        MongoAdminStore(db),
        settings.DEFAULT_ADMIN_USERNAME,
        settings.DEFAULT_ADMIN_PASSWORD,
        settings.DEFAULT_ADMIN_EMAIL,
    )
    created = create_sample_data(MongoRecordStore(db))

    logger.info(
        "OK: seeded %s/%s -> %s",
        settings.MONGO_URL,
        settings.MONGO_DB,
        {kind.value: n for kind, n in created.items()},
    )


if __name__ == "__main__":
    main()
