# hospitals/urls.py
from django.urls import path
from . import views

app_name = 'hospitals'

urlpatterns = [
    # Profile Management
    path('profile', views.hospital_profile, name='hospital_profile'),
    path('inventory', views.update_inventory, name='update_inventory'),

    # Donor Directory (verified hospitals only)
    path('search-donors', views.search_donors, name='search_donors'),

    # Blood Requests
    path('blood-requests', views.blood_requests, name='blood_requests'),
    path('blood-requests/<int:request_id>', views.blood_request_detail, name='blood_request_detail'),
]
