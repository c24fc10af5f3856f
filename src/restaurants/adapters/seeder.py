import json
import os

from src.config import AppConfig
from src.restaurants.adapters.memory_store import InMemoryRestaurantStore
from src.shared.telemetry import Telemetry

# --- ADR 004: Seeding Strategy ---
# Decision: Only the in-process store is seeded.
# Rationale: The Firestore collection is owned by the remote project; the
# seed file exists so local development starts with something to render.
# ---------------------------------


class DataSeeder:
    """
    Populates an empty in-memory collection from a JSON file.
    The file holds a list of objects; "id" becomes the document id.
    """

    def __init__(self, store: InMemoryRestaurantStore, collection: str = AppConfig.COLLECTION) -> None:
        self.store = store
        self.collection = collection
        self.telemetry = Telemetry("DataSeeder")

    def seed_if_empty(self, seed_file: str = AppConfig.SEED_FILE) -> int:
        if not self.store.is_empty(self.collection):
            return 0

        if not os.path.exists(seed_file):
            self.telemetry.log_warning("Seed file NOT found", seed_file=seed_file)
            return 0

        try:
            with open(seed_file, encoding="utf-8") as f:
                rows = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.telemetry.log_error("Auto-seeding failed", e, seed_file=seed_file)
            return 0

        for row in rows:
            data = dict(row)
            doc_id = str(data.pop("id"))
            self.store.put(self.collection, doc_id, data)

        self.telemetry.log_info(f"Seeded {len(rows)} restaurants.")
        return len(rows)
