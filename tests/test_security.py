from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from cms.security import (
    API_KEY_NAME,
    get_settings,
    require_admin,
    session_token,
    verify_admin_password,
)
from cms.settings import Settings


def make_client(settings: Settings):
    app = FastAPI()
    app.dependency_overrides[get_settings] = lambda: settings

    @app.get("/secure")
    def secure(ok=Depends(require_admin)):
        return {"ok": True}

    return TestClient(app)


def test_session_token_depends_on_password():
    a = session_token(Settings(ADMIN_PASSWORD="one"))
    b = session_token(Settings(ADMIN_PASSWORD="two"))

    assert a != b
    assert len(a) == 64


def test_verify_admin_password():
    settings = Settings(ADMIN_PASSWORD="secret")

    assert verify_admin_password("secret", settings) is True
    assert verify_admin_password("Secret", settings) is False
    assert verify_admin_password("", Settings(ADMIN_PASSWORD="")) is False


def test_require_admin_accepts_session_cookie():
    settings = Settings(ADMIN_PASSWORD="pw")
    client = make_client(settings)
    client.cookies.set("admin-session", session_token(settings))

    res = client.get("/secure")

    assert res.status_code == 200
    assert res.json() == {"ok": True}


def test_require_admin_rejects_forged_cookie():
    client = make_client(Settings(ADMIN_PASSWORD="pw"))
    client.cookies.set("admin-session", "true")

    assert client.get("/secure").status_code == 401


def test_require_admin_accepts_api_key_header():
    client = make_client(Settings(CMS_API_KEY="key"))

    assert client.get("/secure", headers={API_KEY_NAME: "key"}).status_code == 200
    assert client.get("/secure", headers={API_KEY_NAME: "wrong"}).status_code == 401


def test_require_admin_rejects_when_nothing_configured():
    client = make_client(Settings(CMS_API_KEY="", ADMIN_PASSWORD=""))
    client.cookies.set("admin-session", session_token(Settings(ADMIN_PASSWORD="")))

    res = client.get("/secure", headers={API_KEY_NAME: ""})

    assert res.status_code == 401
    assert res.json()["detail"] == "Unauthorized"
