from django.db import models
from django.utils import timezone


class Project(models.Model):
    repo_name = models.CharField(max_length=255, unique=True)
    title = models.CharField(max_length=255, null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    github_url = models.URLField(max_length=500)
    live_url = models.URLField(max_length=500, null=True, blank=True)
    featured = models.BooleanField(default=False)
    visible = models.BooleanField(default=True)
    order_index = models.IntegerField(default=0)
    stars = models.IntegerField(default=0)
    forks = models.IntegerField(default=0)
    language = models.CharField(max_length=64, null=True, blank=True)
    topics = models.JSONField(default=list, blank=True)
    view_count = models.PositiveIntegerField(default=0)
    click_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["order_index", "id"]

    def __str__(self) -> str:
        return self.display_title

    @property
    def display_title(self) -> str:
        return self.title or self.repo_name

    def save(self, *args, **kwargs):
        self.updated_at = timezone.now()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)

    def as_dict(self, include_media: bool = False) -> dict:
        data = {
            "id": self.pk,
            "repo_name": self.repo_name,
            "title": self.title,
            "display_title": self.display_title,
            "description": self.description,
            "github_url": self.github_url,
            "live_url": self.live_url,
            "featured": self.featured,
            "visible": self.visible,
            "order_index": self.order_index,
            "stars": self.stars,
            "forks": self.forks,
            "language": self.language,
            "topics": self.topics or [],
            "view_count": self.view_count,
            "click_count": self.click_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_media:
            data["media"] = [m.as_dict() for m in self.media.all()]
        return data


class ProjectMedia(models.Model):
    TYPE_IMAGE = "image"
    TYPE_VIDEO = "video"
    TYPE_CHOICES = [
        (TYPE_IMAGE, "Image"),
        (TYPE_VIDEO, "Video"),
    ]

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="media")
    type = models.CharField(max_length=16, choices=TYPE_CHOICES, default=TYPE_IMAGE)
    url = models.CharField(max_length=1000)
    storage_path = models.CharField(max_length=500, blank=True)
    order_index = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["order_index", "id"]

    def __str__(self) -> str:
        return f"{self.type}<{self.project.repo_name}#{self.order_index}>"

    def as_dict(self) -> dict:
        return {
            "id": self.pk,
            "project_id": self.project_id,
            "type": self.type,
            "url": self.url,
            "order_index": self.order_index,
        }


class ContactMessage(models.Model):
    STATUS_UNREAD = "unread"
    STATUS_READ = "read"
    STATUS_ARCHIVED = "archived"
    STATUS_CHOICES = [
        (STATUS_UNREAD, "Unread"),
        (STATUS_READ, "Read"),
        (STATUS_ARCHIVED, "Archived"),
    ]

    name = models.CharField(max_length=120)
    email = models.EmailField()
    subject = models.CharField(max_length=255, blank=True)
    message = models.TextField()
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_UNREAD)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"Message from {self.name}"

    def as_dict(self) -> dict:
        return {
            "id": self.pk,
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class SiteConfig(models.Model):
    key = models.CharField(max_length=100, unique=True)
    value = models.JSONField(default=dict)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def __str__(self) -> str:
        return self.key
