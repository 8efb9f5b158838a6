from django.urls import path

from prescriptions import views
from prescriptions.views_metrics import metrics

urlpatterns = [
    path('', views.index, name='index'),
    path('api/get-ai-suggestions', views.get_ai_suggestions, name='get_ai_suggestions'),
    path('api/suggestions/', views.suggest_for_patient, name='suggest_for_patient'),
    path('api/prescription/', views.submit_prescription, name='submit_prescription'),
    path('medications.csv', views.medications_csv, name='medications_csv'),
    path('metrics', metrics, name='metrics'),
]
