import strawberry


@strawberry.type
class Query:
    @strawberry.field
    def default(self) -> bool:
        return True
