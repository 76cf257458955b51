from fastapi import Depends

from cms.clients.github_contents import GitHubContentsClient
from cms.db.couchdb import get_comments_db, get_subscribers_db
from cms.repos.comments_repo import CouchCommentsRepo
from cms.repos.posts_repo import GitHubPostsRepo
from cms.repos.subscribers_repo import CouchSubscribersRepo
from cms.security import get_settings
from cms.services.comments_service import CommentsService
from cms.services.posts_service import PostsService
from cms.services.subscribers_service import SubscribersService
from cms.settings import Settings


async def get_github_client(current_settings: Settings = Depends(get_settings)):
    client = GitHubContentsClient(current_settings.github_config)
    try:
        yield client
    finally:
        await client.aclose()


def get_posts_repo(
    client=Depends(get_github_client),
    current_settings: Settings = Depends(get_settings),
):
    return GitHubPostsRepo(client, posts_dir=current_settings.GITHUB_POSTS_DIR)


def get_posts_service(repo=Depends(get_posts_repo)):
    return PostsService(repo=repo)


def get_comments_repo(couch_db=Depends(get_comments_db)):
    return CouchCommentsRepo(couch_db)


def get_comments_service(repo=Depends(get_comments_repo)):
    return CommentsService(repo=repo)


def get_subscribers_repo(couch_db=Depends(get_subscribers_db)):
    return CouchSubscribersRepo(couch_db)


def get_subscribers_service(repo=Depends(get_subscribers_repo)):
    return SubscribersService(repo=repo)
