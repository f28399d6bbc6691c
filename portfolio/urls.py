from django.urls import path
from . import admin_views, views

urlpatterns = [
    path("api/projects/", views.project_list, name="project_list"),
    path("api/projects/<int:pk>/", views.project_detail, name="project_detail"),
    path("api/projects/<int:pk>/click/", views.project_click, name="project_click"),
    path("api/contact/", views.contact_submit, name="contact_submit"),
    path("api/site-config/", views.site_config, name="site_config"),
    path("api/site-config/<str:key>/", views.site_config_value, name="site_config_value"),
    path("manage/projects/", admin_views.project_list, name="admin_project_list"),
    path("manage/projects/create/", admin_views.project_create, name="admin_project_create"),
    path("manage/projects/reorder/", admin_views.reorder_projects, name="admin_reorder_projects"),
    path("manage/projects/<int:pk>/", admin_views.project_update, name="admin_project_update"),
    path("manage/projects/<int:pk>/delete/", admin_views.project_delete, name="admin_project_delete"),
    path("manage/projects/<int:pk>/toggle-visible/", admin_views.toggle_visible, name="admin_toggle_visible"),
    path("manage/projects/<int:pk>/toggle-featured/", admin_views.toggle_featured, name="admin_toggle_featured"),
    path("manage/projects/<int:pk>/media/", admin_views.media_upload, name="admin_media_upload"),
    path("manage/media/<int:pk>/delete/", admin_views.media_delete, name="admin_media_delete"),
    path("manage/messages/", admin_views.message_list, name="admin_message_list"),
    path("manage/messages/<int:pk>/status/", admin_views.message_status, name="admin_message_status"),
    path("manage/messages/<int:pk>/delete/", admin_views.message_delete, name="admin_message_delete"),
    path("manage/settings/<str:key>/", admin_views.site_config_save, name="admin_site_config_save"),
]
