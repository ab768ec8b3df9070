"""
Ticketing Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("events/create", views.events_create_view),
    path("events/deactivate", views.events_deactivate_view),
    path("events/<int:event_id>", views.event_detail_view),
    path("tickets/purchase", views.tickets_purchase_view),
    path("tickets/validate", views.tickets_validate_view),
    path("tickets/refund", views.tickets_refund_view),
    path("tickets/<int:ticket_id>", views.ticket_detail_view),
    path("users/<str:identity>/tickets", views.user_tickets_view),
    path("organizers/<str:identity>", views.organizer_detail_view),
    path("platform-fee", views.platform_fee_view),
    path("admin/platform-fee", views.admin_platform_fee_view),
    path("admin/min-ticket-price", views.admin_min_ticket_price_view),
]
