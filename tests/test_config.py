from blog_api.config import Settings


def test_defaults_match_local_mongo(monkeypatch):
    for name in ("MONGO_URL", "MONGO_DB_NAME", "MONGO_COLLECTION", "PORT"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.MONGO_URL == "mongodb://localhost:27017"
    assert (s.MONGO_DB_NAME, s.MONGO_COLLECTION) == ("mydb", "blog")
    assert s.PORT == 50051


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MONGO_COLLECTION", "posts")
    monkeypatch.setenv("PORT", "8080")
    s = Settings(_env_file=None)
    assert s.MONGO_COLLECTION == "posts"
    assert s.PORT == 8080


def test_every_setting_is_consumed():
    # each field is read by the app, the database layer or the entry point
    assert set(Settings.model_fields) == {
        "MONGO_URL",
        "MONGO_DB_NAME",
        "MONGO_COLLECTION",
        "MONGO_SERVER_SELECTION_TIMEOUT_MS",
        "LOG_LEVEL",
        "HOST",
        "PORT",
    }
