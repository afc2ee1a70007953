from pubwatch.deduplication import dedup_by_title, merge_corpus, sort_corpus


def test_dedup_by_title_keeps_first_occurrence(article_factory):
    """Test that the first article with a given title wins."""
    first = article_factory("A", "Measles update", description="first")
    second = article_factory("B", "Measles update", description="second")
    other = article_factory("A", "Dengue report")

    unique = dedup_by_title([first, other, second])

    assert unique == [first, other]


def test_dedup_by_title_is_case_sensitive(article_factory):
    """Test that titles differing only in case are distinct."""
    articles = [article_factory("A", "Flu season"), article_factory("A", "flu season")]

    assert len(dedup_by_title(articles)) == 2


def test_merge_keeps_existing_copy_of_duplicate_title(article_factory):
    """Test that a refetched title does not replace the stored article."""
    stored = article_factory("A", "Outbreak notice", description="original summary")
    refetched = article_factory("A", "Outbreak notice", description="edited summary")
    fresh = article_factory("A", "New cohort study")

    result = merge_corpus([stored], [refetched, fresh])

    assert result.articles == [stored, fresh]
    assert result.articles[0].description == "original summary"
    assert result.added_count == 1
    assert result.duplicates_dropped == 1


def test_merge_is_idempotent(article_factory):
    """Test that merging the same fetch twice adds nothing the second time."""
    fetched = [article_factory("A", "One"), article_factory("B", "Two")]

    first = merge_corpus([], fetched)
    second = merge_corpus(first.articles, fetched)

    assert second.articles == first.articles
    assert second.added_count == 0


def test_merge_never_drops_existing_articles(article_factory):
    """Test that every stored title survives a merge."""
    existing = [article_factory("A", f"Stored {i}") for i in range(5)]

    result = merge_corpus(existing, [article_factory("B", "Stored 2")])

    assert {a.title for a in existing} <= {a.title for a in result.articles}
    assert len({a.title for a in result.articles}) == len(result.articles)


def test_sort_orders_by_id_then_newest_first(article_factory):
    """Test canonical ordering: id ascending, publish date descending."""
    b_old = article_factory("B", "b old", days_ago=10)
    a_old = article_factory("A", "a old", days_ago=5)
    a_new = article_factory("A", "a new", days_ago=1)
    b_new = article_factory("B", "b new", days_ago=2)

    ordered = sort_corpus([b_old, a_old, a_new, b_new])

    assert [a.title for a in ordered] == ["a new", "a old", "b new", "b old"]


def test_sort_places_invalid_dates_last_within_source(article_factory):
    """Test that unparseable dates sort after dated articles of the same source."""
    undated = article_factory("A", "undated", pub_date="not a date")
    dated = article_factory("A", "dated", days_ago=100)
    other = article_factory("B", "other", days_ago=1)

    ordered = sort_corpus([undated, other, dated])

    assert [a.title for a in ordered] == ["dated", "undated", "other"]


def test_sort_is_stable_for_ties(article_factory):
    """Test that equal keys keep their relative order."""
    first = article_factory("A", "first", days_ago=3)
    second = article_factory("A", "second", days_ago=3)

    assert sort_corpus([first, second]) == [first, second]
    assert sort_corpus([second, first]) == [second, first]


def test_sort_collates_ids_case_insensitively(article_factory):
    """Test that id order ignores case, with lower case first on ties."""
    articles = [article_factory(source_id, source_id) for source_id in ("Banana", "apple", "banana", "AJPH")]

    ordered = sort_corpus(articles)

    assert [a.id for a in ordered] == ["AJPH", "apple", "banana", "Banana"]


def test_sort_tolerates_dates_outside_utc_range(article_factory):
    """Test that a date overflowing once converted to UTC sorts as undated."""
    overflowing = article_factory("A", "edge of time", pub_date="0001-01-01T00:00:00+05:00")
    dated = article_factory("A", "dated", days_ago=2)

    ordered = sort_corpus([overflowing, dated])

    assert [a.title for a in ordered] == ["dated", "edge of time"]
