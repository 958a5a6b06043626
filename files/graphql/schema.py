import strawberry
from strawberry.schema.config import StrawberryConfig

from graphql_upload.upload import UPLOAD_SCALAR_MAP

from .queries import Query
from .mutations import FileMutation


@strawberry.type
class Mutation(FileMutation):
    pass


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    config=StrawberryConfig(scalar_map=UPLOAD_SCALAR_MAP),
)
