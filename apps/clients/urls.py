# apps/clients/urls.py
from django.urls import path

from .views import AddressEditView, ClientDeleteView, ClientEditView, ClientIndexView

app_name = 'clients'

urlpatterns = [
    path('', ClientIndexView.as_view(), name='index'),
    path('clients/delete/', ClientDeleteView.as_view(), name='delete'),
    path('clients/delete/<int:pk>/', ClientDeleteView.as_view(), name='delete'),
    path('clients/edit/', ClientEditView.as_view(), name='edit'),
    path('clients/edit/<int:pk>/', ClientEditView.as_view(), name='edit'),
    path('addresses/edit/', AddressEditView.as_view(), name='edit_address'),
    path('addresses/edit/<int:pk>/', AddressEditView.as_view(), name='edit_address'),
]
