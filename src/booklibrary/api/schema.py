import strawberry
from strawberry.fastapi import GraphQLRouter

from booklibrary.api.context import get_context
from booklibrary.api.mutations import Mutation
from booklibrary.api.queries import Query
from booklibrary.api.subscriptions import Subscription
from booklibrary.core.config import settings

schema = strawberry.Schema(query=Query, mutation=Mutation, subscription=Subscription)


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(schema, context_getter=get_context, graphql_ide=settings.graphql_ide)
