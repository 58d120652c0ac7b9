# donors/urls.py
from django.urls import path
from donors import views

app_name = 'donors'

urlpatterns = [
    # Profile
    path('profile', views.donor_profile, name='donor_profile'),

    # Availability / donation tracking
    path('availability', views.update_availability, name='update_availability'),
    path('last-donation', views.update_last_donation, name='update_last_donation'),

    # Blood Requests
    path('blood-requests', views.donor_blood_requests, name='donor_blood_requests'),
    path('blood-requests/<int:request_id>/respond', views.respond_blood_request, name='respond_blood_request'),
]
