# adminpanel/urls.py
from django.urls import path
from . import views

app_name = 'adminpanel'

urlpatterns = [
    # Hospital verification
    path('unverified-hospitals', views.unverified_hospitals, name='unverified_hospitals'),
    path('hospitals', views.all_hospitals, name='all_hospitals'),
    path('verify-hospital/<int:hospital_id>', views.verify_hospital_view, name='verify_hospital'),
    path('revoke-hospital/<int:hospital_id>', views.revoke_hospital_view, name='revoke_hospital'),

    # Oversight
    path('donors', views.all_donors, name='all_donors'),
    path('blood-requests', views.all_blood_requests, name='all_blood_requests'),
    path('blood-requests/<int:request_id>/notify', views.notify_donors, name='notify_donors'),
]
