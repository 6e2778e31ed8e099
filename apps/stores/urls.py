# apps/stores/urls.py
from django.urls import path
from .views import StoreDirectoryView, StoreDetailView, MyStoreView

urlpatterns = [
    path('', StoreDirectoryView.as_view(), name='store-directory'),
    path('mine/', MyStoreView.as_view(), name='my-store'),
    path('<int:store_id>/', StoreDetailView.as_view(), name='store-detail'),
]
