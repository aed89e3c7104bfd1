from dataclasses import dataclass

from src.catalog.core.services import DbSessionService, ImageStore


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    image_store: ImageStore
