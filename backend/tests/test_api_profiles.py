"""
Tests for the /api/profiles endpoints

Tests cover:
- Auth gate on private routes
- Create/update with validation errors reported as (field, msg) pairs
- Public listing and lookup by user
- Experience/education add and remove, including unknown ids
- Account deletion cascade
- GitHub proxy responses
"""

import pytest
from sqlalchemy import func, select

from devconnector.api.deps import get_github_client
from devconnector.models import Post, Profile, User
from devconnector.services.github import GitHubLookupError, GitHubProfileNotFoundError

PROFILE = {"status": "Student", "skills": "python, sql", "university": "MIT"}
EXPERIENCE = {"title": "Intern", "university": "Acme", "from": "2020-06-01", "current": True}
EDUCATION = {"school": "MIT", "degree": "BSc", "fieldofstudy": "Physics", "from": "2016-09-01"}


class FakeGitHub:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    async def list_repos(self, username):
        if self.error:
            raise self.error
        return self.result


class TestAuthGate:
    @pytest.mark.asyncio
    async def test_missing_token(self, client):
        response = await client.get("/api/profiles/me")

        assert response.status_code == 401
        assert response.json() == {"msg": "No token, authorization denied"}

    @pytest.mark.asyncio
    async def test_invalid_token(self, client):
        response = await client.get("/api/profiles/me", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json() == {"msg": "Token is not valid"}

    @pytest.mark.asyncio
    async def test_x_auth_token_header(self, client, registered):
        user_id, headers = registered
        token = headers["Authorization"].split(" ", 1)[1]

        response = await client.post("/api/profiles", json=PROFILE, headers={"x-auth-token": token})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == user_id


class TestCreateOrUpdate:
    @pytest.mark.asyncio
    async def test_validation_errors(self, client, registered):
        _, headers = registered

        response = await client.post("/api/profiles", json={"university": "MIT"}, headers=headers)

        assert response.status_code == 400
        assert response.json() == {
            "errors": [
                {"field": "status", "msg": "Status is required"},
                {"field": "skills", "msg": "Skills is required"},
            ]
        }

    @pytest.mark.asyncio
    async def test_create_then_merge(self, client, registered):
        user_id, headers = registered

        created = await client.post("/api/profiles", json=PROFILE, headers=headers)
        assert created.status_code == 200
        body = created.json()
        assert body["university"] == "MIT"
        assert body["experience"] == []
        assert body["education"] == []
        assert body["user"] == {"id": user_id, "name": "Grace Hopper", "avatar": body["user"]["avatar"]}
        assert "gravatar.com/avatar/" in body["user"]["avatar"]

        updated = await client.post(
            "/api/profiles", json={"status": "Student", "skills": "python", "location": "Arlington"}, headers=headers
        )
        assert updated.json()["university"] == "MIT"
        assert updated.json()["location"] == "Arlington"
        assert updated.json()["id"] == body["id"]

    @pytest.mark.asyncio
    async def test_status_and_skills_are_not_persisted(self, client, registered):
        _, headers = registered

        body = (await client.post("/api/profiles", json=PROFILE, headers=headers)).json()

        assert "status" not in body
        assert "skills" not in body

    @pytest.mark.asyncio
    async def test_unknown_user_token(self, client, registered, token_for):
        """A token for a user that no longer exists cannot create an orphan profile."""
        _, headers = registered
        await client.post("/api/profiles", json=PROFILE, headers=headers)
        ghost = {"Authorization": f"Bearer {token_for('no-such-user')}"}

        response = await client.post("/api/profiles", json=PROFILE, headers=ghost)

        assert response.status_code == 404
        assert response.json() == {"msg": "User not found"}

        listing = await client.get("/api/profiles")
        assert listing.status_code == 200
        assert len(listing.json()) == 1

    @pytest.mark.asyncio
    async def test_deleted_account_token(self, client, registered):
        _, headers = registered
        await client.delete("/api/profiles", headers=headers)

        response = await client.post("/api/profiles", json=PROFILE, headers=headers)

        assert response.status_code == 404
        assert (await client.get("/api/profiles")).json() == []


class TestReadProfiles:
    @pytest.mark.asyncio
    async def test_me_without_profile(self, client, registered):
        _, headers = registered

        response = await client.get("/api/profiles/me", headers=headers)

        assert response.status_code == 400
        assert response.json() == {"msg": "There is no profile for this user"}

    @pytest.mark.asyncio
    async def test_me(self, client, registered):
        _, headers = registered
        await client.post("/api/profiles", json=PROFILE, headers=headers)

        response = await client.get("/api/profiles/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Grace Hopper"

    @pytest.mark.asyncio
    async def test_list_is_public(self, client, registered):
        _, headers = registered
        await client.post("/api/profiles", json=PROFILE, headers=headers)

        response = await client.get("/api/profiles")

        assert response.status_code == 200
        assert [p["university"] for p in response.json()] == ["MIT"]

    @pytest.mark.asyncio
    async def test_by_user(self, client, registered):
        user_id, headers = registered
        await client.post("/api/profiles", json=PROFILE, headers=headers)

        response = await client.get(f"/api/profiles/user/{user_id}")

        assert response.status_code == 200
        assert response.json()["user"]["id"] == user_id

    @pytest.mark.asyncio
    async def test_by_unknown_user(self, client):
        response = await client.get("/api/profiles/user/5d7a514b5d2c12c7449be045")

        assert response.status_code == 400
        assert response.json() == {"msg": "Profile not found"}


class TestSubRecords:
    @pytest.mark.asyncio
    async def test_experience_without_profile(self, client, registered):
        _, headers = registered

        response = await client.put("/api/profiles/experience", json=EXPERIENCE, headers=headers)

        assert response.status_code == 404
        assert response.json() == {"msg": "There is no profile for this user"}

    @pytest.mark.asyncio
    async def test_experience_validation(self, client, registered):
        _, headers = registered
        await client.post("/api/profiles", json=PROFILE, headers=headers)

        response = await client.put("/api/profiles/experience", json={"title": "Intern"}, headers=headers)

        assert response.status_code == 400
        fields = [error["field"] for error in response.json()["errors"]]
        assert fields == ["university", "from"]

    @pytest.mark.asyncio
    async def test_education_missing_from(self, client, registered):
        _, headers = registered
        await client.post("/api/profiles", json=PROFILE, headers=headers)
        body = {key: value for key, value in EDUCATION.items() if key != "from"}

        response = await client.put("/api/profiles/education", json=body, headers=headers)

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "from", "msg": "From date is required"}]

    @pytest.mark.asyncio
    async def test_add_and_remove_experience(self, client, registered):
        _, headers = registered
        await client.post("/api/profiles", json=PROFILE, headers=headers)

        await client.put("/api/profiles/experience", json=EXPERIENCE, headers=headers)
        response = await client.put(
            "/api/profiles/experience", json={**EXPERIENCE, "title": "Engineer"}, headers=headers
        )
        experience = response.json()["experience"]
        assert [e["title"] for e in experience] == ["Engineer", "Intern"]
        assert experience[0]["from"] == "2020-06-01"
        assert experience[0]["current"] is True

        response = await client.delete(f"/api/profiles/experience/{experience[1]['id']}", headers=headers)

        assert response.status_code == 200
        assert [e["title"] for e in response.json()["experience"]] == ["Engineer"]

    @pytest.mark.asyncio
    async def test_add_and_remove_education(self, client, registered):
        _, headers = registered
        await client.post("/api/profiles", json=PROFILE, headers=headers)

        response = await client.put("/api/profiles/education", json=EDUCATION, headers=headers)
        education = response.json()["education"]
        assert education[0]["fieldofstudy"] == "Physics"

        response = await client.delete(f"/api/profiles/education/{education[0]['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json()["education"] == []

    @pytest.mark.asyncio
    async def test_remove_unknown_ids(self, client, registered):
        """Unknown experience and education ids both answer 404."""
        _, headers = registered
        await client.post("/api/profiles", json=PROFILE, headers=headers)
        await client.put("/api/profiles/experience", json=EXPERIENCE, headers=headers)
        await client.put("/api/profiles/education", json=EDUCATION, headers=headers)

        exp = await client.delete("/api/profiles/experience/not-a-real-id", headers=headers)
        edu = await client.delete("/api/profiles/education/not-a-real-id", headers=headers)

        assert (exp.status_code, exp.json()) == (404, {"msg": "Experience not found"})
        assert (edu.status_code, edu.json()) == (404, {"msg": "Education not found"})

        profile = (await client.get("/api/profiles/me", headers=headers)).json()
        assert len(profile["experience"]) == 1
        assert len(profile["education"]) == 1


class TestDeleteAccount:
    @pytest.mark.asyncio
    async def test_cascade(self, client, registered, session_factory):
        user_id, headers = registered
        await client.post("/api/profiles", json=PROFILE, headers=headers)
        await client.post("/api/posts", json={"text": "Hello"}, headers=headers)

        response = await client.delete("/api/profiles", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"msg": "User deleted"}

        async with session_factory() as session:
            for model, column in ((Post, Post.user_id), (Profile, Profile.user_id), (User, User.id)):
                result = await session.execute(select(func.count()).select_from(model).where(column == user_id))
                assert result.scalar() == 0

        assert (await client.get(f"/api/profiles/user/{user_id}")).status_code == 400


class TestGitHub:
    @pytest.mark.asyncio
    async def test_repos(self, app, client):
        repos = [{"name": "compiler"}]
        app.dependency_overrides[get_github_client] = lambda: FakeGitHub(result=repos)

        response = await client.get("/api/profiles/github/grace")

        assert response.status_code == 200
        assert response.json() == repos

    @pytest.mark.asyncio
    async def test_no_github_profile(self, app, client):
        app.dependency_overrides[get_github_client] = lambda: FakeGitHub(error=GitHubProfileNotFoundError())

        response = await client.get("/api/profiles/github/nobody")

        assert response.status_code == 404
        assert response.json() == {"msg": "No Github profile found"}

    @pytest.mark.asyncio
    async def test_upstream_unreachable(self, app, client):
        app.dependency_overrides[get_github_client] = lambda: FakeGitHub(error=GitHubLookupError("timeout"))

        response = await client.get("/api/profiles/github/grace")

        assert response.status_code == 502
