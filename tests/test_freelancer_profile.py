from sqlalchemy import func, select

from conftest import auth_headers

from marketplace.models.freelancer_profile import FreelancerProfile, PortfolioItem

PROFILE = {
    "location": "Kigali, Rwanda",
    "bio": "Wedding photographer",
    "languages": ["English", "French"],
    "verificationBadge": "ID verified",
    "primarySkills": ["Wedding Photography", "Videography"],
    "secondarySkills": ["Photo Editing"],
    "categories": ["Photography"],
    "yearsOfExperience": 5,
    "hourlyRate": 50,
    "calendar": ["2025-06-01"],
    "socialLinks": {"instagram": "https://instagram.com/jane"},
}


async def count_profiles(session_factory, user_id):
    async with session_factory() as session:
        result = await session.execute(
            select(func.count()).select_from(FreelancerProfile).where(FreelancerProfile.user_id == user_id)
        )
        return result.scalar_one()


async def test_create_then_update_keeps_one_profile(client, make_user, session_factory):
    user_id, headers = await make_user("freelancer")

    res = await client.post("/freelancer/profile", json=PROFILE, headers=headers)
    assert res.status_code == 201
    created = res.json()["profile"]
    assert created["primary_skills"] == ["Wedding Photography", "Videography"]
    assert created["hourly_rate"] == 50
    assert created["calendar"] == ["2025-06-01"]
    assert created["social_links"] == {"instagram": "https://instagram.com/jane", "linkedin": ""}
    assert created["user"]["name"] == "Jane Doe"

    res = await client.put(
        "/freelancer/profile",
        json={"hourly_rate": 65, "primary_skills": ["Drone Photography"]},
        headers=headers,
    )
    assert res.status_code == 200
    assert res.json()["message"] == "Profile updated successfully"
    updated = res.json()["profile"]
    assert updated["profile_id"] == created["profile_id"]
    assert updated["hourly_rate"] == 65
    assert updated["primary_skills"] == ["Drone Photography"]
    # fields not sent stay untouched
    assert updated["secondary_skills"] == ["Photo Editing"]
    assert updated["location"] == "Kigali, Rwanda"

    assert await count_profiles(session_factory, user_id) == 1


async def test_non_freelancer_is_forbidden_and_nothing_is_written(client, make_user, session_factory):
    user_id, headers = await make_user("client")

    res = await client.post("/freelancer/profile", json=PROFILE, headers=headers)
    assert res.status_code == 403
    assert "message" in res.json()

    res = await client.post(
        "/freelancer/portfolio",
        json={"title": "X", "mediaType": "image", "url": "http://a"},
        headers=headers,
    )
    assert res.status_code == 403

    assert await count_profiles(session_factory, user_id) == 0


async def test_stored_role_is_checked_even_if_token_says_freelancer(client, make_user, session_factory):
    user_id, _ = await make_user("client")
    res = await client.post("/freelancer/profile", json=PROFILE, headers=auth_headers(user_id, "freelancer"))
    assert res.status_code == 403
    assert res.json()["message"] == "Only freelancers can create/update freelancer profiles"
    assert await count_profiles(session_factory, user_id) == 0


async def test_fetch_variants(client, make_user):
    user_id, headers = await make_user("freelancer")
    _, other_headers = await make_user("client")

    res = await client.get("/freelancer/profile/me", headers=headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Profile not found. Please create your profile first."

    profile_id = (await client.post("/freelancer/profile", json=PROFILE, headers=headers)).json()["profile"]["profile_id"]

    assert (await client.get("/freelancer/profile/me", headers=headers)).json()["profile"]["profile_id"] == profile_id
    # any authenticated caller can look up by id
    res = await client.get(f"/freelancer/profile/{profile_id}", headers=other_headers)
    assert res.status_code == 200
    res = await client.get(f"/freelancer/profile/user/{user_id}", headers=other_headers)
    assert res.json()["profile"]["profile_id"] == profile_id

    res = await client.get("/freelancer/profile/does-not-exist", headers=other_headers)
    assert res.status_code == 404
    assert res.json() == {"message": "Profile not found"}


async def test_portfolio_add_update_delete(client, make_user):
    _, headers = await make_user("freelancer")
    await client.post("/freelancer/profile", json=PROFILE, headers=headers)

    res = await client.post(
        "/freelancer/portfolio",
        json={"title": "Ceremony", "mediaType": "image", "url": "https://example.com/1.jpg", "tags": ["Wedding"]},
        headers=headers,
    )
    assert res.status_code == 200
    res = await client.post(
        "/freelancer/portfolio",
        json={"title": "Reel", "media_type": "video", "url": "https://example.com/2.mp4"},
        headers=headers,
    )
    portfolio = res.json()["portfolio"]
    assert [p["title"] for p in portfolio] == ["Ceremony", "Reel"]
    first_id = portfolio[0]["item_id"]

    res = await client.put(f"/freelancer/portfolio/{first_id}", json={"title": "Ceremony 2"}, headers=headers)
    assert res.status_code == 200
    item = res.json()["portfolio"][0]
    assert item["title"] == "Ceremony 2"
    assert item["tags"] == ["Wedding"]
    assert item["url"] == "https://example.com/1.jpg"

    res = await client.delete(f"/freelancer/portfolio/{first_id}", headers=headers)
    assert res.status_code == 200
    assert [p["title"] for p in res.json()["portfolio"]] == ["Reel"]


async def test_delete_unknown_portfolio_item_is_404_and_keeps_portfolio(client, make_user, session_factory):
    _, headers = await make_user("freelancer")
    await client.post("/freelancer/profile", json={}, headers=headers)
    await client.post(
        "/freelancer/portfolio",
        json={"title": "X", "mediaType": "image", "url": "http://a"},
        headers=headers,
    )

    res = await client.delete("/freelancer/portfolio/wrong-id", headers=headers)
    assert res.status_code == 404
    assert res.json() == {"message": "Portfolio item not found"}

    res = await client.get("/freelancer/profile/me", headers=headers)
    assert [p["title"] for p in res.json()["profile"]["portfolio"]] == ["X"]
    async with session_factory() as session:
        assert (await session.execute(select(func.count()).select_from(PortfolioItem))).scalar_one() == 1


async def test_update_unknown_portfolio_item_is_404(client, make_user):
    _, headers = await make_user("freelancer")
    await client.post("/freelancer/profile", json={}, headers=headers)
    res = await client.put("/freelancer/portfolio/nope", json={"title": "Y"}, headers=headers)
    assert res.status_code == 404


async def test_portfolio_requires_profile(client, make_user):
    _, headers = await make_user("freelancer")
    res = await client.post(
        "/freelancer/portfolio",
        json={"title": "X", "mediaType": "image", "url": "http://a"},
        headers=headers,
    )
    assert res.status_code == 404


async def test_invalid_media_type_is_rejected(client, make_user):
    _, headers = await make_user("freelancer")
    await client.post("/freelancer/profile", json={}, headers=headers)
    res = await client.post(
        "/freelancer/portfolio",
        json={"title": "X", "mediaType": "audio", "url": "http://a"},
        headers=headers,
    )
    assert res.status_code == 500
    assert res.json()["message"] == "Validation failed"


async def test_any_user_can_review(client, make_user):
    _, headers = await make_user("freelancer")
    _, client_headers = await make_user("client", name="Alice")
    profile_id = (await client.post("/freelancer/profile", json={}, headers=headers)).json()["profile"]["profile_id"]

    res = await client.post(
        f"/freelancer/profile/{profile_id}/review",
        json={"clientName": "Alice", "rating": 5, "comment": "Great work"},
        headers=client_headers,
    )
    assert res.status_code == 200
    reviews = res.json()["reviews"]
    assert len(reviews) == 1
    assert reviews[0]["rating"] == 5
    assert reviews[0]["date"]

    res = await client.post(
        f"/freelancer/profile/{profile_id}/review",
        json={"clientName": "Alice", "rating": 6, "comment": "Too good"},
        headers=client_headers,
    )
    assert res.status_code == 500

    res = await client.post(
        "/freelancer/profile/missing/review",
        json={"clientName": "Alice", "rating": 4, "comment": "ok"},
        headers=client_headers,
    )
    assert res.status_code == 404


GROUPED_PROFILE = {
    "personalInfo": {
        "profilePhoto": "https://example.com/profile.jpg",
        "location": "Kigali, Rwanda",
        "languages": ["English", "Kinyarwanda"],
        "verificationBadge": "ID verified",
    },
    "skills": {
        "primarySkills": ["Wedding Photography", "Videography"],
        "categories": ["Photography"],
        "yearsOfExperience": 5,
    },
    "pricing": {"hourlyRate": 50, "perJobRate": 200, "currency": "USD", "negotiable": True},
    "availability": {"status": "Busy", "maxJobsPerDay": 2},
    "contact": {
        "hireEnabled": False,
        "socialLinks": {"linkedin": "https://linkedin.com/in/jane"},
    },
    "additionalInfo": {"equipment": ["Canon EOS R5"]},
    "settings": {"privacy": {"showContactInfo": False}, "notifications": {"bookingRequests": False}},
}


async def test_grouped_body_is_stored(client, make_user):
    _, headers = await make_user("freelancer")

    res = await client.post("/freelancer/profile", json=GROUPED_PROFILE, headers=headers)
    assert res.status_code == 201
    profile = res.json()["profile"]
    assert profile["location"] == "Kigali, Rwanda"
    assert profile["languages"] == ["English", "Kinyarwanda"]
    assert profile["primary_skills"] == ["Wedding Photography", "Videography"]
    assert profile["categories"] == ["Photography"]
    assert profile["years_of_experience"] == 5
    assert profile["hourly_rate"] == 50
    assert profile["per_job_rate"] == 200
    assert profile["availability_status"] == "Busy"
    assert profile["max_jobs_per_day"] == 2
    assert profile["hire_enabled"] is False
    assert profile["social_links"]["linkedin"] == "https://linkedin.com/in/jane"
    assert profile["equipment"] == ["Canon EOS R5"]
    assert profile["show_contact_info"] is False
    assert profile["notify_booking_requests"] is False
    assert profile["notify_messages"] is True

    res = await client.put("/freelancer/profile", json={"pricing": {"hourlyRate": 70}}, headers=headers)
    assert res.json()["profile"]["hourly_rate"] == 70
    assert res.json()["profile"]["per_job_rate"] == 200


async def test_unknown_fields_are_rejected_and_nothing_is_written(client, make_user, session_factory):
    user_id, headers = await make_user("freelancer")

    for body in (
        {"hourlyRate": 50, "hourly_wage": 60},
        {"pricing": {"hourlyRate": 50, "discount": 10}},
        {"settings": {"privacy": {"showEmail": True}}},
        {"pricing": 50},
    ):
        res = await client.post("/freelancer/profile", json=body, headers=headers)
        assert res.status_code == 500
        assert res.json()["message"] == "Validation failed"

    assert await count_profiles(session_factory, user_id) == 0


async def test_deactivated_account_cannot_change_profile(client, make_user, session_factory):
    user_id, headers = await make_user("freelancer", is_active=False)

    res = await client.post("/freelancer/profile", json=PROFILE, headers=headers)
    assert res.status_code == 400
    assert res.json() == {"message": "This account has been deactivated"}
    res = await client.get("/freelancer/search", headers=headers)
    assert res.status_code == 400

    assert await count_profiles(session_factory, user_id) == 0
