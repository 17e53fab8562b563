"""
API Views for the current user's notifications.
Every endpoint only ever touches request.user's own notifications.
"""
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from portal_project.pagination import auto_paginate
from .models import Notification
from .serializers import NotificationSerializer
from .services import NotificationService


@api_view(['GET'])
@auto_paginate
def notification_list(request):
    """
    GET /api/notifications/
    - Filters: ?is_read=true|false
    """
    notifications = NotificationService.list_for_user(request.user, request.query_params)
    return Response(NotificationSerializer(notifications, many=True).data)


@api_view(['GET'])
def notification_unread_count(request):
    """
    GET /api/notifications/unread-count/
    """
    return Response({'count': NotificationService.unread_count(request.user)})


@api_view(['PATCH'])
def notification_mark_read(request, pk):
    """
    PATCH /api/notifications/<id>/read/
    """
    notification = get_object_or_404(Notification, pk=pk, user=request.user)
    NotificationService.mark_read(notification)
    return Response(NotificationSerializer(notification).data)


@api_view(['PATCH'])
def notification_mark_all_read(request):
    """
    PATCH /api/notifications/mark-all-read/
    """
    updated = NotificationService.mark_all_read(request.user)
    return Response({'updated': updated})


@api_view(['DELETE'])
def notification_delete(request, pk):
    """
    DELETE /api/notifications/<id>/
    """
    notification = get_object_or_404(Notification, pk=pk, user=request.user)
    notification.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)
