from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # Authentication
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),

    # User profile
    path('profile/', views.get_current_user, name='profile'),

    # User management (admin role)
    path('users/', views.users, name='users'),
]
