from conftest import make_user_data


# ============================================================
# Users
# ============================================================

async def test_create_user_assigns_id_and_clears_profile_picture(store):
    data = make_user_data("a@example.com")
    data["profile_picture"] = "https://cdn.example.com/me.png"

    user = await store.create_user(data)

    assert user.id == 1
    assert user.profile_picture is None
    assert user.created_at is not None
    assert await store.get_user(user.id) == user


async def test_get_user_returns_none_when_missing(store):
    assert await store.get_user(42) is None


async def test_email_lookup_is_case_insensitive(store):
    user = await store.create_user(make_user_data("Foo@Bar.com"))

    found = await store.get_user_by_email("foo@bar.com")

    assert found is not None
    assert found.id == user.id
    assert await store.get_user_by_email("other@bar.com") is None


async def test_store_does_not_enforce_email_uniqueness(store):
    first = await store.create_user(make_user_data("dup@example.com"))
    second = await store.create_user(make_user_data("DUP@example.com"))

    assert first.id != second.id
    # First match wins
    assert (await store.get_user_by_email("dup@example.com")).id == first.id


async def test_update_user_merges_fields(store):
    user = await store.create_user(make_user_data("a@example.com"))

    updated = await store.update_user(user.id, {"full_name": "New Name", "grade": "11th"})

    assert updated.full_name == "New Name"
    assert updated.grade == "11th"
    assert updated.email == user.email
    assert updated.created_at == user.created_at
    assert (await store.get_user(user.id)).full_name == "New Name"


async def test_update_user_unknown_id_returns_none(store):
    assert await store.update_user(99, {"full_name": "Ghost"}) is None


# ============================================================
# Posts
# ============================================================

async def test_feed_is_newest_first_with_counts(store):
    author = await store.create_user(make_user_data("author@example.com"))
    reader = await store.create_user(make_user_data("reader@example.com"))

    first = await store.create_post({"user_id": author.id, "content": "first"})
    second = await store.create_post({"user_id": author.id, "content": "second"})
    third = await store.create_post({"user_id": reader.id, "content": "third"})

    await store.create_like({"post_id": first.id, "user_id": reader.id})
    await store.create_comment({"post_id": first.id, "user_id": reader.id, "content": "nice"})
    await store.create_comment({"post_id": first.id, "user_id": author.id, "content": "thanks"})

    feed = await store.get_posts()

    assert [post.id for post in feed] == [third.id, second.id, first.id]
    for newer, older in zip(feed, feed[1:]):
        assert newer.created_at >= older.created_at

    oldest = feed[-1]
    assert oldest.user.id == author.id
    assert oldest.likes_count == 1
    assert oldest.comments_count == 2
    assert oldest.shares_count == 0


async def test_feed_filters_by_post_type(store):
    author = await store.create_user(make_user_data("author@example.com"))
    worksheet = await store.create_post({
        "user_id": author.id,
        "content": "worksheet",
        "post_type": "book_worksheet",
    })
    regular = await store.create_post({"user_id": author.id, "content": "hello"})

    assert regular.post_type == "regular"
    assert [p.id for p in await store.get_posts("book_worksheet")] == [worksheet.id]
    assert await store.get_posts("video") == []


async def test_user_posts_only_include_owner(store):
    alice = await store.create_user(make_user_data("alice@example.com"))
    bob = await store.create_user(make_user_data("bob@example.com"))
    await store.create_post({"user_id": alice.id, "content": "a1"})
    await store.create_post({"user_id": bob.id, "content": "b1"})
    await store.create_post({"user_id": alice.id, "content": "a2"})

    posts = await store.get_user_posts(alice.id)

    assert [post.content for post in posts] == ["a2", "a1"]


async def test_update_post_keeps_id_and_created_at(store):
    author = await store.create_user(make_user_data("author@example.com"))
    post = await store.create_post({"user_id": author.id, "content": "draft"})

    updated = await store.update_post(post.id, {
        "content": "final",
        "id": 999,
        "created_at": None,
    })

    assert updated.id == post.id
    assert updated.created_at == post.created_at
    assert updated.content == "final"


async def test_delete_post_reports_existence(store):
    author = await store.create_user(make_user_data("author@example.com"))
    post = await store.create_post({"user_id": author.id, "content": "bye"})

    assert await store.delete_post(post.id) is True
    assert await store.delete_post(post.id) is False
    assert await store.get_post(post.id) is None
    assert await store.update_post(post.id, {"content": "x"}) is None


async def test_ids_are_never_reused(store):
    author = await store.create_user(make_user_data("author@example.com"))
    first = await store.create_post({"user_id": author.id, "content": "one"})
    await store.delete_post(first.id)

    second = await store.create_post({"user_id": author.id, "content": "two"})

    assert second.id == first.id + 1


async def test_deleting_a_post_leaves_orphans(store):
    author = await store.create_user(make_user_data("author@example.com"))
    post = await store.create_post({"user_id": author.id, "content": "x"})
    await store.create_comment({"post_id": post.id, "user_id": author.id, "content": "c"})
    await store.create_like({"post_id": post.id, "user_id": author.id})

    await store.delete_post(post.id)

    assert len(await store.get_post_comments(post.id)) == 1
    assert len(await store.get_post_likes(post.id)) == 1


async def test_feed_tolerates_missing_owner(store, db):
    author = await store.create_user(make_user_data("author@example.com"))
    await store.create_post({"user_id": author.id, "content": "x"})
    db.users.remove(author.id)

    feed = await store.get_posts()

    assert feed[0].user is None


# ============================================================
# Comments and Likes
# ============================================================

async def test_comments_are_scoped_to_post(store):
    author = await store.create_user(make_user_data("author@example.com"))
    p1 = await store.create_post({"user_id": author.id, "content": "p1"})
    p2 = await store.create_post({"user_id": author.id, "content": "p2"})
    c1 = await store.create_comment({"post_id": p1.id, "user_id": author.id, "content": "on p1"})
    await store.create_comment({"post_id": p2.id, "user_id": author.id, "content": "on p2"})

    assert [c.id for c in await store.get_post_comments(p1.id)] == [c1.id]
    assert await store.delete_comment(c1.id) is True
    assert await store.get_post_comments(p1.id) == []
    assert await store.delete_comment(c1.id) is False


async def test_create_like_is_idempotent(store):
    user = await store.create_user(make_user_data("u@example.com"))
    post = await store.create_post({"user_id": user.id, "content": "x"})

    first = await store.create_like({"post_id": post.id, "user_id": user.id})
    second = await store.create_like({"post_id": post.id, "user_id": user.id})

    assert second.id == first.id
    assert len(await store.get_post_likes(post.id)) == 1
    assert await store.get_like(post.id, user.id) == first


async def test_delete_like(store):
    user = await store.create_user(make_user_data("u@example.com"))
    post = await store.create_post({"user_id": user.id, "content": "x"})
    like = await store.create_like({"post_id": post.id, "user_id": user.id})

    assert await store.delete_like(like.id) is True
    assert await store.get_like(post.id, user.id) is None
    assert await store.delete_like(like.id) is False


async def test_like_statuses_follow_input_order(store):
    user = await store.create_user(make_user_data("u@example.com"))
    posts = [
        await store.create_post({"user_id": user.id, "content": str(i)})
        for i in range(4)
    ]
    await store.create_like({"post_id": posts[1].id, "user_id": user.id})
    await store.create_like({"post_id": posts[3].id, "user_id": user.id})

    statuses = await store.get_like_statuses([p.id for p in posts], user.id)

    assert statuses == [False, True, False, True]


# ============================================================
# Messages
# ============================================================

async def test_conversation_is_oldest_first_and_pair_scoped(store):
    a = await store.create_user(make_user_data("a@example.com"))
    b = await store.create_user(make_user_data("b@example.com"))
    c = await store.create_user(make_user_data("c@example.com"))

    m1 = await store.create_message({"sender_id": a.id, "receiver_id": b.id, "content": "hi"})
    await store.create_message({"sender_id": a.id, "receiver_id": c.id, "content": "other"})
    m2 = await store.create_message({"sender_id": b.id, "receiver_id": a.id, "content": "hey"})
    m3 = await store.create_message({"sender_id": a.id, "receiver_id": b.id, "content": "how are you"})

    conversation = await store.get_conversation(b.id, a.id)

    assert [m.id for m in conversation] == [m1.id, m2.id, m3.id]
    for older, newer in zip(conversation, conversation[1:]):
        assert older.created_at <= newer.created_at


async def test_create_message_always_starts_unread(store):
    a = await store.create_user(make_user_data("a@example.com"))
    b = await store.create_user(make_user_data("b@example.com"))

    message = await store.create_message({
        "sender_id": a.id,
        "receiver_id": b.id,
        "content": "hi",
        "is_read": True,
    })

    assert message.is_read is False


async def test_mark_as_read_is_one_way_and_idempotent(store):
    a = await store.create_user(make_user_data("a@example.com"))
    b = await store.create_user(make_user_data("b@example.com"))
    message = await store.create_message({"sender_id": a.id, "receiver_id": b.id, "content": "hi"})

    first = await store.mark_message_as_read(message.id)
    second = await store.mark_message_as_read(message.id)

    assert first.is_read is True
    assert second.is_read is True
    assert (await store.get_conversation(a.id, b.id))[0].is_read is True
    assert await store.mark_message_as_read(999) is None


async def test_user_messages_cover_both_directions(store):
    a = await store.create_user(make_user_data("a@example.com"))
    b = await store.create_user(make_user_data("b@example.com"))
    c = await store.create_user(make_user_data("c@example.com"))
    await store.create_message({"sender_id": a.id, "receiver_id": b.id, "content": "1"})
    await store.create_message({"sender_id": c.id, "receiver_id": a.id, "content": "2"})
    await store.create_message({"sender_id": b.id, "receiver_id": c.id, "content": "3"})

    messages = await store.get_user_messages(a.id)

    assert sorted(m.content for m in messages) == ["1", "2"]


async def test_conversations_group_by_partner(store):
    me = await store.create_user(make_user_data("me@example.com"))
    b = await store.create_user(make_user_data("b@example.com"))
    c = await store.create_user(make_user_data("c@example.com"))

    await store.create_message({"sender_id": me.id, "receiver_id": b.id, "content": "to b"})
    await store.create_message({"sender_id": c.id, "receiver_id": me.id, "content": "from c 1"})
    await store.create_message({"sender_id": b.id, "receiver_id": me.id, "content": "from b"})
    last_from_c = await store.create_message({
        "sender_id": c.id, "receiver_id": me.id, "content": "from c 2",
    })

    summaries = await store.get_conversations(me.id)

    assert [s.partner_id for s in summaries] == [b.id, c.id]
    by_partner = {s.partner_id: s for s in summaries}
    assert by_partner[b.id].unread_count == 1
    assert by_partner[b.id].last_message.content == "from b"
    assert by_partner[c.id].unread_count == 2
    assert by_partner[c.id].last_message.id == last_from_c.id
    assert by_partner[c.id].partner.email == "c@example.com"
    assert await store.count_unread_messages(me.id) == 3
    assert await store.count_unread_messages(b.id) == 1


# ============================================================
# Resources
# ============================================================

async def test_resources_filter_by_type(store):
    owner = await store.create_user(make_user_data("t@example.com", role="teacher"))
    book = await store.create_resource({
        "user_id": owner.id, "title": "Algebra", "type": "book", "url": "https://x/a",
    })
    video = await store.create_resource({
        "user_id": owner.id, "title": "Fractions", "type": "video", "url": "https://x/f",
    })

    assert [r.id for r in await store.get_resources()] == [book.id, video.id]
    assert [r.id for r in await store.get_resources_by_type("video")] == [video.id]
    assert await store.get_resources_by_type("worksheet") == []

    assert await store.delete_resource(book.id) is True
    assert await store.delete_resource(book.id) is False
    assert await store.get_resource(book.id) is None
