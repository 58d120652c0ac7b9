from django.urls import path, include


urlpatterns = [
    path('api/auth/', include('accounts.urls')),
    path('api/admin/', include('adminpanel.urls')),
    path('api/hospital/', include('hospitals.urls')),
    path('api/donor/', include('donors.urls')),
]

handler404 = 'raktsetu.views.not_found'
handler500 = 'raktsetu.views.server_error'
