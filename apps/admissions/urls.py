from django.urls import path

from . import views

app_name = 'admissions'

urlpatterns = [
    # Public routes
    path('', views.AdmissionApplyView.as_view(), name='apply'),
    path('submitted/', views.admission_submitted, name='submitted'),
    path('verify-parent/', views.verify_parent, name='verify_parent'),
    path('api/parent-exists/', views.parent_exists, name='parent_exists'),

    # Admin routes
    path('pending/', views.PendingPaymentListView.as_view(), name='pending_list'),
    path('<int:pk>/', views.AdmissionDetailView.as_view(), name='admission_detail'),
    path('<int:pk>/reject/', views.RejectAdmissionView.as_view(), name='reject_admission'),
    path('payments/<int:pk>/verify/', views.VerifyPaymentView.as_view(), name='verify_payment'),
    path('payments/<int:pk>/reject/', views.RejectPaymentView.as_view(), name='reject_payment'),
]
