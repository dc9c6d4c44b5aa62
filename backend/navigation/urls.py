from django.urls import path

from . import views

app_name = "navigation"

urlpatterns = [
    path("groups/<slug:destination_id>/toggle", views.toggle_group, name="toggle_group"),
    path("layout/toggle", views.toggle_layout, name="toggle_layout"),
    path("go/<slug:destination_id>", views.go, name="go"),
]
