"""Vercel serverless entry point for CerviScreen."""
import os
import sys

# Add src to path so imports work
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from cerviscreen.config import PortalConfig
from cerviscreen.logging_config import configure_logging
from cerviscreen.model.profile import Physician
from cerviscreen.store import open_store
from cerviscreen.store.repositories import PhysicianRepository
from cerviscreen.web.app import create_app

config = PortalConfig.from_env()
configure_logging(config.log_level)

# In-memory DB for the demo unless a hosted backend is configured
if config.backend == "sqlite":
    config = PortalConfig(db_path=":memory:", log_level=config.log_level)
store = open_store(config)

# Seed physicians so patients have someone to choose in the demo
if config.backend == "sqlite":
    repo = PhysicianRepository(store)
    for physician in (
        Physician(
            id="phy-demo-1",
            full_name="Sarah Mitchell",
            specialization="Gynaecology",
            license_number="GMC-4821903",
            phone="+44 20 7946 0101",
            years_of_experience=14,
        ),
        Physician(
            id="phy-demo-2",
            full_name="James Okafor",
            specialization="General Practice",
            license_number="GMC-5530218",
            phone="+44 20 7946 0102",
            years_of_experience=8,
        ),
        Physician(
            id="phy-demo-3",
            full_name="Priya Raman",
            specialization="Colposcopy",
            license_number="GMC-6107745",
            phone="+44 20 7946 0103",
            years_of_experience=11,
        ),
    ):
        repo.upsert(physician)

app = create_app(store=store)
