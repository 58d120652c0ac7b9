from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # ========================================
    # REGISTRATION / LOGIN (donor, hospital, admin)
    # ========================================
    path('register/<str:role>', views.register, name='register'),
    path('login/<str:role>', views.login, name='login'),

    # ========================================
    # PASSWORD RESET
    # ========================================
    path('reset-password/hospital', views.reset_hospital_password, name='reset_hospital_password'),

    # ========================================
    # CURRENT PRINCIPAL
    # ========================================
    path('profile', views.profile, name='profile'),
]
