from carelink.models import GroupMember


def create_private_group(client, headers, name="Tan Family"):
    return client.post("/api/groups", json={"name": name, "isPrivate": True}, headers=headers).json()["data"]


def test_available_groups(client, make_user, auth_headers, make_group):
    owner = make_user()
    bob = make_user(email="bob@example.com", name="Bob")
    make_group(owner, name="Walking Club")
    make_group(owner, name="Choir", members=[bob])
    create_private_group(client, auth_headers(owner))

    available = client.get("/api/groups/available", headers=auth_headers(bob)).json()["data"]
    assert [g["name"] for g in available] == ["Walking Club"]


def test_private_group_needs_invite(client, make_user, auth_headers):
    owner = make_user()
    bob = make_user(email="bob@example.com", name="Bob")
    group = create_private_group(client, auth_headers(owner))

    response = client.post(f"/api/groups/{group['id']}/join", headers=auth_headers(bob))
    assert response.status_code == 403

    response = client.get(f"/api/groups/{group['id']}/invite-token", headers=auth_headers(bob))
    assert response.status_code == 404
    assert response.json()["message"] == "Group not found or you're not the owner"

    token = client.get(f"/api/groups/{group['id']}/invite-token", headers=auth_headers(owner)).json()["data"]["inviteToken"]
    again = client.get(f"/api/groups/{group['id']}/invite-token", headers=auth_headers(owner)).json()["data"]["inviteToken"]
    assert token == again

    found = client.get(f"/api/groups/invite/{token}", headers=auth_headers(bob)).json()["data"]
    assert found["name"] == "Tan Family"
    assert "inviteToken" not in found

    response = client.post("/api/groups/join-by-token", json={"inviteToken": token}, headers=auth_headers(bob))
    assert response.status_code == 200
    assert response.json()["data"] == {"groupId": group["id"], "groupName": "Tan Family"}

    response = client.post("/api/groups/join-by-token", json={"inviteToken": token}, headers=auth_headers(bob))
    assert response.status_code == 409


def test_bad_invite_token(client, user, auth_headers):
    response = client.post("/api/groups/join-by-token", json={"inviteToken": "nope"}, headers=auth_headers(user))
    assert response.status_code == 404

    response = client.post("/api/groups/join-by-token", json={"inviteToken": ""}, headers=auth_headers(user))
    assert response.status_code == 400
    assert response.json()["errors"] == ["Invite token is required"]


def test_leave_group(client, db, make_user, auth_headers, make_group):
    owner = make_user()
    bob = make_user(email="bob@example.com", name="Bob")
    group = make_group(owner, members=[bob])

    response = client.post(f"/api/groups/{group.id}/leave", headers=auth_headers(bob))
    assert response.status_code == 200
    assert db.query(GroupMember).filter(GroupMember.user_id == bob.id).count() == 0

    response = client.post(f"/api/groups/{group.id}/leave", headers=auth_headers(bob))
    assert response.status_code == 404
    assert response.json()["message"] == "Not a member of that group"
