from django.urls import path, re_path

from . import views

app_name = "dashboard"

urlpatterns = [
    path("", views.index, name="index"),
    path("dashboard", views.home, name="home"),
    re_path(r"^(?P<page_path>[a-z0-9][a-z0-9\-/]*)$", views.destination, name="destination"),
]
