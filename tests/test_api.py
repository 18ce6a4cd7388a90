"""게시판 REST API 테스트.

Board REST API tests — Members, boards, posts and recommendations through
the HTTP layer. Checks status codes, ownership rules and the JSON shape.
"""

import uuid

from httpx import AsyncClient

from tests.conftest import auth_header, make_token

MEMBERS = "/api/v1/members/"
BOARDS = "/api/v1/boards/"
POSTS = "/api/v1/posts/"


class TestHealth:
    """헬스 체크 테스트."""

    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}


class TestMemberApi:
    """회원 API 테스트."""

    async def test_register(self, client: AsyncClient):
        res = await client.post(MEMBERS, json={"username": "dave", "password": "dave123!"})
        assert res.status_code == 201
        data = res.json()
        assert data["username"] == "dave"
        assert "password" not in data
        assert "password_hash" not in data

    async def test_register_duplicate(self, client: AsyncClient, alice):
        res = await client.post(MEMBERS, json={"username": "alice", "password": "other123"})
        assert res.status_code == 409
        assert res.json()["detail"] == "Already existing member with username: alice"

    async def test_register_blank_username(self, client: AsyncClient):
        res = await client.post(MEMBERS, json={"username": "   ", "password": "dave123!"})
        assert res.status_code == 422

    async def test_register_short_password(self, client: AsyncClient):
        res = await client.post(MEMBERS, json={"username": "dave", "password": "123"})
        assert res.status_code == 422

    async def test_login(self, client: AsyncClient, alice):
        res = await client.post(f"{MEMBERS}login", json={"username": "alice", "password": "alice123!"})
        assert res.status_code == 200
        data = res.json()
        assert data["token_type"] == "bearer"
        assert data["member_id"] == str(alice.id)

        me = await client.get(f"{MEMBERS}me", headers=auth_header(data["access_token"]))
        assert me.status_code == 200
        assert me.json()["username"] == "alice"

    async def test_login_wrong_password(self, client: AsyncClient, alice):
        res = await client.post(f"{MEMBERS}login", json={"username": "alice", "password": "nope"})
        assert res.status_code == 401

    async def test_login_unknown_user_same_message(self, client: AsyncClient, alice):
        """존재하지 않는 사용자와 잘못된 비밀번호는 같은 메시지."""
        wrong_pw = await client.post(f"{MEMBERS}login", json={"username": "alice", "password": "nope"})
        unknown = await client.post(f"{MEMBERS}login", json={"username": "ghost", "password": "nope"})
        assert unknown.status_code == 401
        assert unknown.json()["detail"] == wrong_pw.json()["detail"]

    async def test_me_requires_token(self, client: AsyncClient):
        res = await client.get(f"{MEMBERS}me")
        assert res.status_code in (401, 403)

    async def test_me_invalid_token(self, client: AsyncClient):
        res = await client.get(f"{MEMBERS}me", headers=auth_header("not-a-jwt"))
        assert res.status_code == 401

    async def test_get_member(self, client: AsyncClient, alice):
        res = await client.get(f"{MEMBERS}{alice.id}")
        assert res.status_code == 200
        assert res.json()["username"] == "alice"

    async def test_get_member_not_found(self, client: AsyncClient):
        missing = uuid.uuid4()
        res = await client.get(f"{MEMBERS}{missing}")
        assert res.status_code == 404
        assert str(missing) in res.json()["detail"]

    async def test_get_member_by_username(self, client: AsyncClient, bob):
        res = await client.get(f"{MEMBERS}username/bob")
        assert res.status_code == 200
        assert res.json()["id"] == str(bob.id)

    async def test_search_members(self, client: AsyncClient, alice, bob, carol):
        res = await client.get(MEMBERS, params={"keyword": "o"})
        assert res.status_code == 200
        assert {m["username"] for m in res.json()} == {"bob", "carol"}

    async def test_update_self(self, client: AsyncClient, alice, alice_token):
        res = await client.put(
            f"{MEMBERS}{alice.id}",
            json={"username": "alice2", "password": "newpass1"},
            headers=auth_header(alice_token),
        )
        assert res.status_code == 200
        assert res.json()["username"] == "alice2"

        login = await client.post(f"{MEMBERS}login", json={"username": "alice2", "password": "newpass1"})
        assert login.status_code == 200

    async def test_update_other_member_forbidden(self, client: AsyncClient, alice, bob_token):
        res = await client.put(
            f"{MEMBERS}{alice.id}",
            json={"username": "hacked", "password": "hacked1"},
            headers=auth_header(bob_token),
        )
        assert res.status_code == 403

    async def test_delete_self(self, client: AsyncClient, bob, bob_token):
        bob_id = bob.id
        res = await client.delete(f"{MEMBERS}{bob_id}", headers=auth_header(bob_token))
        assert res.status_code == 200

        res = await client.get(f"{MEMBERS}{bob_id}")
        assert res.status_code == 404

    async def test_delete_other_member_forbidden(self, client: AsyncClient, alice, bob_token):
        res = await client.delete(f"{MEMBERS}{alice.id}", headers=auth_header(bob_token))
        assert res.status_code == 403


class TestBoardApi:
    """게시판 API 테스트."""

    async def test_list_boards(self, client: AsyncClient, boards):
        res = await client.get(BOARDS)
        assert res.status_code == 200
        assert {b["code"] for b in res.json()} == {"male", "female"}

    async def test_get_board(self, client: AsyncClient, boards):
        res = await client.get(f"{BOARDS}male")
        assert res.status_code == 200
        assert res.json()["name"] == "자기소개(남)"

    async def test_get_board_not_found(self, client: AsyncClient, boards):
        res = await client.get(f"{BOARDS}unknown")
        assert res.status_code == 404


class TestBoardPostApi:
    """게시판별 게시글 API 테스트."""

    async def test_create_post(self, client: AsyncClient, boards, alice, alice_token):
        res = await client.post(
            f"{BOARDS}male/posts",
            json={"title": "Hello", "content": "I am alice"},
            headers=auth_header(alice_token),
        )
        assert res.status_code == 201
        data = res.json()
        assert data["author_username"] == "alice"
        assert data["board_code"] == "male"
        assert data["view_count"] == 0
        assert data["recommendation_count"] == 0

    async def test_create_post_requires_login(self, client: AsyncClient, boards):
        res = await client.post(f"{BOARDS}male/posts", json={"title": "t", "content": "c"})
        assert res.status_code in (401, 403)

    async def test_create_post_blank_title(self, client: AsyncClient, boards, alice_token):
        res = await client.post(
            f"{BOARDS}male/posts",
            json={"title": " ", "content": "c"},
            headers=auth_header(alice_token),
        )
        assert res.status_code == 422

    async def test_create_post_unknown_board(self, client: AsyncClient, boards, alice_token):
        res = await client.post(
            f"{BOARDS}nope/posts",
            json={"title": "t", "content": "c"},
            headers=auth_header(alice_token),
        )
        assert res.status_code == 404

    async def test_list_posts(self, client: AsyncClient, alice_post):
        res = await client.get(f"{BOARDS}male/posts")
        assert res.status_code == 200
        assert [p["id"] for p in res.json()] == [str(alice_post.id)]

        res = await client.get(f"{BOARDS}female/posts")
        assert res.json() == []

    async def test_list_posts_invalid_sort(self, client: AsyncClient, alice_post):
        res = await client.get(f"{BOARDS}male/posts", params={"sort": "random"})
        assert res.status_code == 422

    async def test_view_post_increments(self, client: AsyncClient, alice_post):
        url = f"{BOARDS}male/posts/{alice_post.id}"
        await client.get(url)
        res = await client.get(url)
        assert res.status_code == 200
        assert res.json()["view_count"] == 2

    async def test_view_post_wrong_board(self, client: AsyncClient, alice_post):
        res = await client.get(f"{BOARDS}female/posts/{alice_post.id}")
        assert res.status_code == 400


class TestPostApi:
    """게시글 API 테스트."""

    async def test_get_post_does_not_count_view(self, client: AsyncClient, alice_post):
        res = await client.get(f"{POSTS}{alice_post.id}")
        assert res.status_code == 200
        assert res.json()["view_count"] == 0

    async def test_get_post_not_found(self, client: AsyncClient):
        res = await client.get(f"{POSTS}{uuid.uuid4()}")
        assert res.status_code == 404

    async def test_search_by_title(self, client: AsyncClient, alice_post):
        res = await client.get(f"{POSTS}search", params={"title": "Hell"})
        assert res.status_code == 200
        assert [p["title"] for p in res.json()] == ["Hello"]

    async def test_search_by_author(self, client: AsyncClient, alice_post):
        res = await client.get(f"{POSTS}search", params={"author": "ali"})
        assert len(res.json()) == 1

    async def test_search_requires_exactly_one_field(self, client: AsyncClient, alice_post):
        res = await client.get(f"{POSTS}search")
        assert res.status_code == 400

        res = await client.get(f"{POSTS}search", params={"title": "a", "content": "b"})
        assert res.status_code == 400

    async def test_update_by_author(self, client: AsyncClient, alice_post, alice_token):
        res = await client.put(
            f"{POSTS}{alice_post.id}",
            json={"title": "Edited", "content": "New body"},
            headers=auth_header(alice_token),
        )
        assert res.status_code == 200
        assert res.json()["title"] == "Edited"

    async def test_update_by_other_member_forbidden(self, client: AsyncClient, alice_post, bob_token):
        res = await client.put(
            f"{POSTS}{alice_post.id}",
            json={"title": "Hacked", "content": "Hacked"},
            headers=auth_header(bob_token),
        )
        assert res.status_code == 403

    async def test_delete_by_author(self, client: AsyncClient, alice_post, alice_token):
        post_id = alice_post.id
        res = await client.delete(f"{POSTS}{post_id}", headers=auth_header(alice_token))
        assert res.status_code == 200

        res = await client.get(f"{POSTS}{post_id}")
        assert res.status_code == 404

    async def test_delete_by_other_member_forbidden(self, client: AsyncClient, alice_post, bob_token):
        res = await client.delete(f"{POSTS}{alice_post.id}", headers=auth_header(bob_token))
        assert res.status_code == 403


class TestRecommendApi:
    """추천 API 테스트."""

    async def test_recommend(self, client: AsyncClient, alice_post, bob_token):
        res = await client.post(f"{POSTS}{alice_post.id}/recommend", headers=auth_header(bob_token))
        assert res.status_code == 200
        assert res.json() == {"post_id": str(alice_post.id), "recommendation_count": 1}

    async def test_recommend_twice_conflict(self, client: AsyncClient, alice_post, bob_token):
        url = f"{POSTS}{alice_post.id}/recommend"
        await client.post(url, headers=auth_header(bob_token))
        res = await client.post(url, headers=auth_header(bob_token))
        assert res.status_code == 409
        assert res.json()["detail"] == "Member has already recommended this post"

    async def test_two_members_recommend(self, client: AsyncClient, alice_post, bob_token, carol):
        url = f"{POSTS}{alice_post.id}/recommend"
        await client.post(url, headers=auth_header(bob_token))
        res = await client.post(url, headers=auth_header(make_token(carol)))
        assert res.json()["recommendation_count"] == 2

        detail = await client.get(f"{POSTS}{alice_post.id}")
        assert detail.json()["recommendation_count"] == 2

    async def test_recommend_unknown_post(self, client: AsyncClient, bob_token):
        res = await client.post(f"{POSTS}{uuid.uuid4()}/recommend", headers=auth_header(bob_token))
        assert res.status_code == 404


class TestMemberEdgeCaseApi:
    """회원 API 경계 조건 테스트."""

    async def test_register_multibyte_password_over_limit(self, client: AsyncClient):
        """한글 30자(90바이트) 비밀번호는 422."""
        res = await client.post(MEMBERS, json={"username": "kim", "password": "가" * 30})
        assert res.status_code == 422

    async def test_update_multibyte_password_over_limit(self, client: AsyncClient, alice, alice_token):
        res = await client.put(
            f"{MEMBERS}{alice.id}",
            json={"username": "alice", "password": "가" * 30},
            headers=auth_header(alice_token),
        )
        assert res.status_code == 422

    async def test_login_password_over_bcrypt_limit(self, client: AsyncClient, alice):
        """너무 긴 비밀번호 로그인도 같은 401 메시지."""
        wrong_pw = await client.post(f"{MEMBERS}login", json={"username": "alice", "password": "nope"})
        res = await client.post(f"{MEMBERS}login", json={"username": "alice", "password": "x" * 100})
        assert res.status_code == 401
        assert res.json()["detail"] == wrong_pw.json()["detail"]

    async def test_delete_member_with_posts(self, client: AsyncClient, alice_post, alice_token):
        """작성한 게시글이 있는 회원은 탈퇴 불가 — 400."""
        author_id = alice_post.member_id
        res = await client.delete(f"{MEMBERS}{author_id}", headers=auth_header(alice_token))
        assert res.status_code == 400
        assert str(author_id) in res.json()["detail"]

        res = await client.get(f"{MEMBERS}{author_id}")
        assert res.status_code == 200


class TestPostListingApi:
    """작성자별, 기간별 게시글 목록 API 테스트."""

    async def test_list_by_author(self, client: AsyncClient, alice_post, bob):
        res = await client.get(f"{POSTS}author/alice")
        assert res.status_code == 200
        assert [p["id"] for p in res.json()] == [str(alice_post.id)]

        res = await client.get(f"{POSTS}author/bob")
        assert res.json() == []

    async def test_list_by_author_is_exact_match(self, client: AsyncClient, alice_post):
        res = await client.get(f"{POSTS}author/ali")
        assert res.status_code == 404

    async def test_list_in_period(self, client: AsyncClient, alice_post):
        res = await client.get(
            f"{POSTS}period",
            params={"start": "2000-01-01T00:00:00", "end": "2999-12-31T23:59:59"},
        )
        assert res.status_code == 200
        assert [p["id"] for p in res.json()] == [str(alice_post.id)]

    async def test_list_in_period_outside(self, client: AsyncClient, alice_post):
        res = await client.get(
            f"{POSTS}period",
            params={"start": "2000-01-01T00:00:00", "end": "2000-12-31T23:59:59"},
        )
        assert res.json() == []

    async def test_list_in_period_reversed(self, client: AsyncClient, alice_post):
        res = await client.get(
            f"{POSTS}period",
            params={"start": "2001-01-01T00:00:00", "end": "2000-01-01T00:00:00"},
        )
        assert res.status_code == 400
