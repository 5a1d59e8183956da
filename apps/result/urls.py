from django.urls import path

from . import views

app_name = 'result'

urlpatterns = [
    path('', views.ResultListView.as_view(), name='result_list'),
    path('create/', views.ResultCreateView.as_view(), name='result_create'),
    path('<int:pk>/update/', views.ResultUpdateView.as_view(), name='result_update'),
    path('<int:pk>/delete/', views.ResultDeleteView.as_view(), name='result_delete'),
]
