# apps/prompts/views.py
"""
Prompt API views

Thin glue over the override resolver and the customization lifecycle
manager. Owner identity comes from the authenticated user, else the
X-Owner-ID header, else the owner_id query parameter.
"""
import logging

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.domain.models import (
    MAX_OWNER_ID_LENGTH,
    DomainException,
    EditOutcome,
    InvalidContentError,
    NotAvailableError,
    NotFoundError,
    ValidationError as DomainValidationError,
)
from apps.infrastructure.container import create_prompt_services

from .serializers import (
    EditResultSerializer,
    InstructionEditSerializer,
    ResolvedPromptSerializer,
)

logger = logging.getLogger(__name__)

OWNER_PARAMETER = OpenApiParameter(
    name="X-Owner-ID",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.HEADER,
    description="Owner identity when the request is not authenticated",
    required=False,
)


def get_owner_id(request):
    """Derive the owner identity for a request, or None"""
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return str(user.pk)

    owner_id = request.headers.get("X-Owner-ID") or request.query_params.get(
        "owner_id"
    )
    if owner_id and owner_id.strip():
        return owner_id.strip()
    return None


def _owner_error_response(owner_id):
    """400 response when the owner identity is missing or too long, else None"""
    if owner_id is None:
        error = "Owner identity is required"
    elif len(owner_id) > MAX_OWNER_ID_LENGTH:
        error = f"Owner identity must be at most {MAX_OWNER_ID_LENGTH} characters"
    else:
        return None

    return Response(
        {"success": False, "error": error},
        status=status.HTTP_400_BAD_REQUEST,
    )


def _error_response(error: DomainException):
    """Map a domain error to an HTTP response"""
    if isinstance(error, DomainValidationError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, NotAvailableError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR

    log = logger.warning if code < 500 else logger.error
    log(
        f"Prompt operation failed: {error.message}",
        extra=error.context(),
    )

    return Response(
        {"success": False, "error": error.message, **error.context()},
        status=code,
    )


@extend_schema(
    tags=["Prompts"],
    summary="List resolved prompts",
    description="Get every base prompt merged with the caller's customization.",
    parameters=[OWNER_PARAMETER],
    responses={200: ResolvedPromptSerializer(many=True)},
)
@api_view(["GET"])
@permission_classes([AllowAny])
def prompt_list(request):
    """List base prompts resolved for the requesting owner"""
    owner_id = get_owner_id(request)
    owner_error = _owner_error_response(owner_id)
    if owner_error is not None:
        return owner_error

    try:
        services = create_prompt_services()
        resolved = services.resolver.resolve(owner_id)
    except DomainException as e:
        return _error_response(e)

    serializer = ResolvedPromptSerializer([p.to_dict() for p in resolved], many=True)
    return Response(serializer.data)


@extend_schema(
    tags=["Prompts"],
    summary="Get resolved prompt",
    parameters=[OWNER_PARAMETER],
    responses={200: ResolvedPromptSerializer, 404: OpenApiTypes.OBJECT},
)
@api_view(["GET"])
@permission_classes([AllowAny])
def prompt_detail(request, prompt_id):
    """Get one base prompt resolved for the requesting owner"""
    owner_id = get_owner_id(request)
    owner_error = _owner_error_response(owner_id)
    if owner_error is not None:
        return owner_error

    try:
        services = create_prompt_services()
        resolved = services.resolver.resolve_one(prompt_id, owner_id)
    except DomainException as e:
        return _error_response(e)

    return Response(ResolvedPromptSerializer(resolved.to_dict()).data)


@extend_schema(
    tags=["Prompts"],
    summary="Edit or delete the caller's instruction",
    description=(
        "POST/PUT submit an edit: non-empty content creates or updates the "
        "customization, blank content deletes it. DELETE removes it explicitly "
        "and returns 404 when there is nothing to delete."
    ),
    parameters=[OWNER_PARAMETER],
    request=InstructionEditSerializer,
    responses={
        200: EditResultSerializer,
        201: EditResultSerializer,
        204: None,
        400: OpenApiTypes.OBJECT,
        404: OpenApiTypes.OBJECT,
        503: OpenApiTypes.OBJECT,
    },
)
@api_view(["POST", "PUT", "DELETE"])
@permission_classes([AllowAny])
def prompt_instruction(request, prompt_id):
    """Single edit entry point for a prompt's customization"""
    owner_id = get_owner_id(request)
    owner_error = _owner_error_response(owner_id)
    if owner_error is not None:
        return owner_error

    if request.method == "DELETE":
        return _delete_instruction(prompt_id, owner_id)

    serializer = InstructionEditSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data

    try:
        services = create_prompt_services()
        outcome = services.lifecycle.submit_edit(
            prompt_id,
            owner_id,
            data.get("content"),
            model=data.get("model"),
            temperature=data.get("temperature"),
        )
        resolved = services.resolver.resolve_one(prompt_id, owner_id)

    except InvalidContentError as e:
        # Lifecycle manager should never let this through
        logger.error(f"Invalid content reached the store: {e}", exc_info=True)
        return _error_response(e)

    except DomainException as e:
        return _error_response(e)

    result = EditResultSerializer(
        {"outcome": outcome.value, "prompt": resolved.to_dict()}
    )
    code = (
        status.HTTP_201_CREATED
        if outcome == EditOutcome.CREATED
        else status.HTTP_200_OK
    )
    return Response(result.data, status=code)


def _delete_instruction(prompt_id, owner_id):
    """Handle explicit delete"""
    try:
        services = create_prompt_services()
        services.lifecycle.delete_customization(prompt_id, owner_id)
    except DomainException as e:
        return _error_response(e)

    return Response(status=status.HTTP_204_NO_CONTENT)
