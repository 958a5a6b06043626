"""
GraphQL execution engine contract and the Strawberry adapter
"""
from dataclasses import dataclass
from typing import Any, AsyncIterable, Dict, Iterable, Optional, Protocol, Union


@dataclass(frozen=True)
class SingleResult:
    data: Any
    errors: Any = None


@dataclass(frozen=True)
class IncrementalResult:
    """An initial payload followed by a finite, ordered sequence of patches"""
    initial_result: Any
    subsequent_results: Union[AsyncIterable[Any], Iterable[Any]]


EngineResult = Union[SingleResult, IncrementalResult]


class ExecutionEngine(Protocol):
    async def execute(
        self,
        query: str,
        variables: Dict[str, Any],
        context: Any,
        operation_name: Optional[str] = None,
    ) -> EngineResult:
        ...


def format_result(result: Any) -> Any:
    """JSON-ready form of a graphql-core result object (dicts pass through)"""
    return getattr(result, 'formatted', result)


class StrawberryEngine:
    """
    Runs operations against a Strawberry schema

    Usage:
        engine = StrawberryEngine(schema)
        result = await engine.execute(query, variables, context)
    """

    def __init__(self, schema):
        self.schema = schema

    async def execute(
        self,
        query: str,
        variables: Dict[str, Any],
        context: Any,
        operation_name: Optional[str] = None,
    ) -> EngineResult:
        result = await self.schema.execute(
            query,
            variable_values=variables,
            context_value=context,
            operation_name=operation_name,
        )

        # Incremental delivery (@defer / @stream)
        if hasattr(result, 'initial_result'):
            return IncrementalResult(
                initial_result=result.initial_result,
                subsequent_results=result.subsequent_results,
            )

        errors = None
        if result.errors:
            errors = [error.formatted for error in result.errors]
        return SingleResult(data=result.data, errors=errors)
