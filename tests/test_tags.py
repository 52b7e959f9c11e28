from laundry_enrich.tags import TAG_RULES, generate_seo_tags


def test_base_and_locality_tags():
    tags = generate_seo_tags({"name": "Spin City", "city": "Austin"})
    assert tags[0] == "laundromat"
    assert tags[-3:] == ["near me", "austin laundromat", "laundromat in austin"]


def test_no_city_skips_city_tags():
    tags = generate_seo_tags({"name": "Spin City"})
    assert tags[-1] == "near me"
    assert not any("laundromat in" in t for t in tags)


def test_tags_follow_table_order_not_text_order():
    record = {"name": "Wi-Fi Coin Laundry", "description": "Free parking, drop off and pickup"}
    tags = generate_seo_tags(record)
    table_order = []
    for _, tag in TAG_RULES:
        if tag in tags and tag not in table_order:
            table_order.append(tag)
    rule_tags = [t for t in tags if t in table_order]
    assert rule_tags == table_order
    assert tags.index("coin operated") < tags.index("drop-off service") < tags.index("free wifi")


def test_tags_are_unique():
    tags = generate_seo_tags({"name": "Eco Green Organic Laundry", "services": "wifi, wi-fi"})
    assert tags.count("eco-friendly") == 1
    assert tags.count("free wifi") == 1
    assert len(tags) == len(set(tags))


def test_hours_tags_added():
    assert "24-hour" in generate_seo_tags({"name": "ABC Laundry", "hours": "Mon-Sun: 24 hours"})
    assert "open late" in generate_seo_tags({"name": "ABC Laundry", "hours": "Mon-Sun: 6am-11pm"})


def test_scans_services_and_features():
    tags = generate_seo_tags({"name": "Z", "services": "Delivery", "features": "Attendant, vending"})
    assert "delivery service" in tags
    assert "attendant on duty" in tags
    assert "vending machines" in tags


def test_deterministic_and_idempotent():
    record = {"name": "ABC Coin Laundry", "description": "Drop-off, pickup, delivery", "city": "Reno",
              "hours": "Mon-Sat 7am-10pm"}
    assert generate_seo_tags(record) == generate_seo_tags(record)
    assert record == {"name": "ABC Coin Laundry", "description": "Drop-off, pickup, delivery",
                      "city": "Reno", "hours": "Mon-Sat 7am-10pm"}


def test_empty_record_still_gets_base_tags():
    assert generate_seo_tags({}) == ["laundromat", "near me"]
