from django.urls import path
from . import views

urlpatterns = [
    path('leaderboard/', views.leaderboard, name='leaderboard'),
    path('u/<str:username>/', views.user_profile, name='user_profile'),
    path('contests/', views.contests, name='contests'),
    path('hackathons/', views.hackathons, name='hackathons'),
]
