from django.urls import path

from . import views

app_name = 'parent'

urlpatterns = [
    path('', views.ParentDashboardView.as_view(), name='dashboard'),
    path('ward/<int:pk>/', views.WardDetailView.as_view(), name='ward_detail'),
]
