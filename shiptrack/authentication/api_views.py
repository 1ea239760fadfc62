import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import AccessToken

from users.models import User
from users.permissions import IsAdmin
from .serializers import UserSerializer, UserCreateSerializer, LoginSerializer

logger = logging.getLogger(__name__)


def issue_token(user):
    """Sign an access token whose ``id`` claim identifies ``user``."""
    return str(AccessToken.for_user(user))


class AdminUserViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Admin listing of every account."""
    queryset = User.objects.all().order_by('-created_at')
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['role']
    search_fields = ['name', 'email']

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response({
            'success': True,
            'count': len(serializer.data),
            'data': serializer.data
        })


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def register(request):
    """User registration endpoint."""
    serializer = UserCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save(role=User.Role.USER)

    logger.info(f"User registered: {user.email}")

    return Response({
        'success': True,
        'token': issue_token(user),
        'data': serializer.data
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login(request):
    """Exchange email and password for an access token."""
    serializer = LoginSerializer(data=request.data, context={'request': request})
    serializer.is_valid(raise_exception=True)
    user = serializer.validated_data['user']

    logger.info(f"User logged in: {user.email}")

    return Response({
        'success': True,
        'token': issue_token(user)
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    """Get current user profile."""
    return Response({
        'success': True,
        'data': UserSerializer(request.user).data
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def create_admin(request):
    """Create another account with the admin role."""
    serializer = UserCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save(role=User.Role.ADMIN)

    logger.info(f"Admin {user.email} created by {request.user.email}")

    return Response({
        'success': True,
        'data': serializer.data
    }, status=status.HTTP_201_CREATED)
