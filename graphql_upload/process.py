"""
Processes GraphQL multipart upload requests end to end

extract envelope -> bind files -> drop unset variables -> execute -> shape response
"""
import inspect
import logging
from typing import Any, Dict, List, Optional

from django.http import HttpRequest

from .binder import bind_uploads, plan_bindings, remove_unset_variables
from .conf import UploadPolicy
from .engine import ExecutionEngine, IncrementalResult, SingleResult, format_result
from .exceptions import ExecutionFailure, PayloadTooLarge, UploadError
from .multipart_handler import extract_envelope


logger = logging.getLogger(__name__)


def error_response(message: str) -> Dict[str, str]:
    return {'error': f"Error processing upload: {message}"}


async def resolve_context(context: Any) -> Any:
    """Await the context if the caller computes it asynchronously"""
    if inspect.isawaitable(context):
        return await context
    return context


def discard_context(context: Any) -> None:
    """Close a context coroutine that will never be awaited"""
    if inspect.iscoroutine(context):
        context.close()


async def collect_results(result: IncrementalResult) -> List[Any]:
    """Drain an incremental result, keeping emission order"""
    results = [format_result(result.initial_result)]

    subsequent = result.subsequent_results
    if hasattr(subsequent, '__aiter__'):
        async for patch in subsequent:
            results.append(format_result(patch))
    else:
        for patch in subsequent:
            results.append(format_result(patch))

    return results


async def execute_operation(engine: ExecutionEngine, operations: Dict[str, Any], context: Any) -> Any:
    """
    Raises:
        ExecutionFailure: the engine raised while running the operation
    """
    try:
        return await engine.execute(
            operations['query'],
            operations['variables'],
            context,
            operation_name=operations.get('operationName'),
        )
    except Exception as e:
        raise ExecutionFailure(str(e) or type(e).__name__) from e


async def shape_response(result: Any) -> Dict[str, Any]:
    if isinstance(result, SingleResult):
        return {'data': result.data, 'errors': result.errors}

    if isinstance(result, IncrementalResult):
        return {'results': await collect_results(result)}

    raise TypeError(f"Unsupported execution result: {type(result).__name__}")


async def process_upload(
    request: HttpRequest,
    context: Any,
    engine: ExecutionEngine,
    policy: Optional[UploadPolicy] = None,
) -> Dict[str, Any]:
    """
    Handle a GraphQL multipart request

    Args:
        request: Django request with a multipart/form-data body
        context: Context value for resolvers, or an awaitable producing it
        engine: Execution engine running the resolved operation
        policy: Upload policy (defaults to GRAPHQL_UPLOAD settings)

    Returns:
        dict: one of {'error'}, {'data', 'errors'} or {'results'}

    Errors raised while resolving the context are not caught.
    """
    if policy is None:
        policy = UploadPolicy.from_settings()

    rejection = None
    try:
        envelope = await extract_envelope(request)
        operations = envelope.operations
        variables = operations['variables']

        bindings = plan_bindings(envelope.path_map, envelope.files, policy)
        await bind_uploads(bindings, variables, policy)
        remove_unset_variables(variables)
    except PayloadTooLarge as e:
        logger.warning("Upload rejected: %s", e)
        rejection = {'error': str(e)}
    except UploadError as e:
        logger.warning("Upload rejected: %s", e)
        rejection = error_response(str(e))
    except Exception as e:
        logger.exception("Error processing upload")
        rejection = error_response(str(e) or type(e).__name__)

    if rejection is not None:
        discard_context(context)
        return rejection

    context_value = await resolve_context(context)

    try:
        result = await execute_operation(engine, operations, context_value)
        return await shape_response(result)
    except ExecutionFailure as e:
        logger.exception("GraphQL execution failed")
        return error_response(str(e))
    except Exception as e:
        logger.exception("Error processing upload")
        return error_response(str(e) or type(e).__name__)
