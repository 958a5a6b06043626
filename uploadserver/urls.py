"""
URL configuration for uploadserver project.

The GraphQL endpoint accepts regular GraphQL requests and GraphQL multipart
(file upload) requests on the same URL.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.http import JsonResponse
from django.urls import path
from django.views.decorators.csrf import csrf_exempt
from strawberry.django.views import AsyncGraphQLView

from files.graphql.schema import schema
from graphql_upload.engine import StrawberryEngine
from graphql_upload.multipart_handler import is_multipart_request
from graphql_upload.process import process_upload

from .context import UploadContext, get_client_ip


class UploadGraphQLView(AsyncGraphQLView):
    """GraphQL view that handles multipart uploads before Strawberry sees them"""

    async def dispatch(self, request, *args, **kwargs):
        """Route multipart POST requests to the upload processor"""
        if request.method == 'POST' and is_multipart_request(request):
            # You'll usually want to authenticate users in get_context before uploading
            payload = await process_upload(
                request,
                self.get_context(request),
                StrawberryEngine(self.schema),
            )
            return JsonResponse(payload)

        return await super().dispatch(request, *args, **kwargs)

    async def get_context(self, request, response=None):
        return UploadContext(request=request, response=response, ip=get_client_ip(request))


urlpatterns = [
    path("graphql/", csrf_exempt(UploadGraphQLView.as_view(schema=schema))),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
