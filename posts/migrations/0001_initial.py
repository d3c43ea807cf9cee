from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(db_index=True, unique=True)),
                ("name", models.CharField(max_length=80, unique=True)),
            ],
            options={"ordering": ["name"], "verbose_name_plural": "categories"},
        ),
        migrations.CreateModel(
            name="Post",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(db_index=True, max_length=200, unique=True)),
                ("title", models.CharField(max_length=240)),
                ("layout", models.CharField(blank=True, max_length=80)),
                ("date", models.DateTimeField(db_index=True)),
                ("excerpt", models.TextField(blank=True)),
                ("body", models.TextField()),
                ("source_path", models.CharField(max_length=500)),
                ("content_hash", models.CharField(db_index=True, max_length=64)),
                ("version", models.IntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["-date", "-id"]},
        ),
        migrations.AddField(
            model_name="post",
            name="categories",
            field=models.ManyToManyField(blank=True, related_name="posts", to="posts.category"),
        ),
    ]
