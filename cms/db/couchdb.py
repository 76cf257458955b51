import pycouchdb

from cms.settings import settings


def get_couch_server():
    """
    Create a CouchDB server handle.
    Called at runtime to avoid import-time connections.
    """
    return pycouchdb.Server(settings.couchdb_url)


def get_comments_db():
    return get_couch_server().database(settings.COUCHDB_COMMENTS_DATABASE)


def get_subscribers_db():
    return get_couch_server().database(settings.COUCHDB_SUBSCRIBERS_DATABASE)
