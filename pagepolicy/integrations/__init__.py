from pagepolicy.integrations.fastapi import init_app, paginator
from pagepolicy.integrations.mongo import MongoResultSet

__all__ = ["init_app", "paginator", "MongoResultSet"]
