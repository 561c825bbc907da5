from carelink.models import Announcement, Comment, GroupMember


def post_announcement(client, headers, group_id, title="Tai chi on Saturday"):
    return client.post("/api/announcements", json={
        "groupId": group_id,
        "title": title,
        "content": "Meet at the void deck at 7am.",
    }, headers=headers)


def test_owner_posts_announcement(client, make_user, auth_headers, make_group):
    owner = make_user()
    group = make_group(owner)

    response = post_announcement(client, auth_headers(owner), group.id)
    assert response.status_code == 201
    assert response.json()["data"]["title"] == "Tai chi on Saturday"

    listed = client.get("/api/announcements", params={"groupId": group.id}, headers=auth_headers(owner))
    assert listed.status_code == 200
    assert listed.json()["data"][0]["authorName"] == "Ann Tan"


def test_only_owner_can_post(client, make_user, auth_headers, make_group):
    owner = make_user()
    member = make_user(email="bob@example.com", name="Bob")
    group = make_group(owner, members=[member])

    response = post_announcement(client, auth_headers(member), group.id)
    assert response.status_code == 403
    assert response.json()["message"] == "Only the group owner can post announcements"

    response = post_announcement(client, auth_headers(owner), 999)
    assert response.status_code == 404
    assert response.json()["message"] == "Group not found"


def test_non_member_cannot_comment(client, db, make_user, auth_headers, make_group):
    owner = make_user()
    outsider = make_user(email="eve@example.com", name="Eve")
    group = make_group(owner)
    announcement_id = post_announcement(client, auth_headers(owner), group.id).json()["data"]["id"]

    response = client.post("/api/announcements/comments", json={
        "announcementId": announcement_id,
        "content": "Can I come?",
    }, headers=auth_headers(outsider))

    assert response.status_code == 403
    assert response.json() == {
        "status": "error",
        "message": "Must be a member to comment",
        "error": "NOT_MEMBER",
    }
    assert db.query(Comment).count() == 0


def test_member_comments_and_ownership(client, db, make_user, auth_headers, make_group):
    owner = make_user()
    member = make_user(email="bob@example.com", name="Bob")
    group = make_group(owner)
    announcement_id = post_announcement(client, auth_headers(owner), group.id).json()["data"]["id"]

    assert client.post(f"/api/groups/{group.id}/join", headers=auth_headers(member)).status_code == 200
    assert client.post(f"/api/groups/{group.id}/join", headers=auth_headers(member)).status_code == 409

    response = client.post("/api/announcements/comments", json={
        "announcementId": announcement_id,
        "content": "Count me in",
    }, headers=auth_headers(member))
    assert response.status_code == 201
    comment_id = response.json()["data"]["id"]

    comments = client.get(f"/api/announcements/{announcement_id}/comments", headers=auth_headers(member)).json()["data"]
    assert comments[0]["isOwnComment"] is True
    comments = client.get(f"/api/announcements/{announcement_id}/comments", headers=auth_headers(owner)).json()["data"]
    assert comments[0]["isOwnComment"] is False

    response = client.delete(f"/api/announcements/comments/{comment_id}", headers=auth_headers(owner))
    assert response.status_code == 403
    assert response.json()["message"] == "You are not authorized to delete this comment"

    response = client.delete(f"/api/announcements/comments/{comment_id}", headers=auth_headers(member))
    assert response.status_code == 200
    assert db.query(Comment).count() == 0


def test_edit_and_delete_announcement(client, db, make_user, auth_headers, make_group):
    owner = make_user()
    member = make_user(email="bob@example.com", name="Bob")
    group = make_group(owner, members=[member])
    announcement_id = post_announcement(client, auth_headers(owner), group.id).json()["data"]["id"]
    client.post("/api/announcements/comments", json={
        "announcementId": announcement_id, "content": "Nice",
    }, headers=auth_headers(member))

    response = client.put(f"/api/announcements/{announcement_id}", json={"title": "Moved"},
                          headers=auth_headers(member))
    assert response.status_code == 403
    assert response.json()["message"] == "Only the group owner can edit this announcement"

    response = client.put(f"/api/announcements/{announcement_id}", json={"title": "Moved"},
                          headers=auth_headers(owner))
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Moved"

    assert client.put("/api/announcements/999", json={"title": "x"}, headers=auth_headers(owner)).status_code == 404

    response = client.delete(f"/api/announcements/{announcement_id}", headers=auth_headers(owner))
    assert response.status_code == 200
    assert db.query(Announcement).count() == 0
    assert db.query(Comment).count() == 0


def test_create_group_adds_owner_as_member(client, db, user, auth_headers):
    response = client.post("/api/groups", json={"name": "Knitting Circle"}, headers=auth_headers(user))
    assert response.status_code == 201
    group_id = response.json()["data"]["id"]

    assert db.query(GroupMember).filter(GroupMember.group_id == group_id, GroupMember.user_id == user.id).count() == 1
    joined = client.get("/api/groups/joined", headers=auth_headers(user)).json()["data"]
    assert [g["name"] for g in joined] == ["Knitting Circle"]

    response = client.post("/api/groups", json={"name": "n" * 51}, headers=auth_headers(user))
    assert response.status_code == 400
