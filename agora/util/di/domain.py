"""Domain layer DI providers."""

from dishka import Scope, provide

from agora.config import AuthSettings, ThreadingSettings
from agora.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from agora.domain.service import (
    CommentService,
    JWTService,
    PostService,
    ThreadingService,
    UserService,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_threading_service(
        self, threading_settings: ThreadingSettings
    ) -> ThreadingService:
        """Provide the stateless threading engine."""
        return ThreadingService(max_reply_depth=threading_settings.max_reply_depth)

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_service: UserService,
        vote_service: VoteService,
        threading_service: ThreadingService,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            user_service=user_service,
            vote_service=vote_service,
            threading_service=threading_service,
        )

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        comment_service: CommentService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            comment_service=comment_service,
            vote_service=vote_service,
            user_service=user_service,
        )
