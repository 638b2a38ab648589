from link_announcer.retrieval.url import extract_candidates, extract_urls

def test_extract_urls_basic():
    """
    WHY: Identify every link in a chat line so each can get a title.
    HOW: Pass text with mixed HTTP/HTTPS links.
    EXPECTED: Return list containing all valid URLs, in order.
    """
    text = "Check this out https://example.com/foo and http://test.org"
    urls = extract_urls(text)
    assert urls == ["https://example.com/foo", "http://test.org"]

def test_query_string_is_kept():
    """
    WHY: The query often identifies the page (article IDs, search terms).
    HOW: Extract from a sentence with a link carrying a query string.
    EXPECTED: The whole URL including ?a=1, nothing after the space.
    """
    candidates = list(extract_candidates("check http://example.com/page?a=1 out"))
    assert len(candidates) == 1
    assert candidates[0].url == "http://example.com/page?a=1"
    assert candidates[0].is_ip is False
    assert candidates[0].suspect is False

def test_punctuation_stripping():
    """
    WHY: Users end sentences with links. We need the CLEAN url.
    HOW: Pass links followed by stacked punctuation.
    EXPECTED: Trailing , ] . ? ! ; are all removed.
    """
    assert extract_urls("Click here: https://baz.com;") == ["https://baz.com"]
    assert extract_urls("seen https://foo.com/bar?!...") == ["https://foo.com/bar"]
    assert extract_urls("[https://foo.com/x], ok") == ["https://foo.com/x"]

def test_deduplication():
    text = "Link https://same.com and https://same.com again"
    assert extract_urls(text) == ["https://same.com"]

def test_no_scheme_is_ignored_by_default():
    """
    WHY: Without schemeless detection, "file.txt" or "e.g." must never look like links.
    HOW: Pass bare domains with detection off.
    EXPECTED: Nothing is extracted.
    """
    assert extract_urls("go to www.example.com or example.org") == []

def test_ip_literal_is_flagged():
    candidates = list(extract_candidates("router at http://192.168.1.1:8080/admin now"))
    assert len(candidates) == 1
    assert candidates[0].url == "http://192.168.1.1:8080/admin"
    assert candidates[0].is_ip is True

def test_out_of_range_ip_still_extracted_as_ip():
    """
    WHY: Range checking belongs to validation, which reports INVALID_IP.
    HOW: Extract a dotted quad with an octet above 255.
    EXPECTED: A candidate flagged is_ip.
    """
    candidates = list(extract_candidates("http://256.1.1.1/"))
    assert candidates[0].is_ip is True

def test_ip_prefix_of_domain_is_not_an_ip():
    candidates = list(extract_candidates("http://1.2.3.4.example.com/"))
    assert len(candidates) == 1
    assert candidates[0].is_ip is False

def test_schemeless_domain():
    """
    WHY: People paste "www.example.com" without http.
    HOW: Extract with detect_schemeless=True.
    EXPECTED: The bare domain is a normal (non-suspect) candidate.
    """
    candidates = list(extract_candidates("www.example.com", detect_schemeless=True))
    assert [c.url for c in candidates] == ["www.example.com"]
    assert candidates[0].suspect is False

def test_schemeless_keeps_scheme_when_present():
    candidates = list(extract_candidates("see https://example.com/x", detect_schemeless=True))
    assert [c.url for c in candidates] == ["https://example.com/x"]
    assert candidates[0].suspect is False

def test_schemeless_email_is_suspect():
    """
    WHY: Email addresses contain domains but aren't links.
    HOW: Extract "john.doe@example.com" with schemeless detection on.
    EXPECTED: The only candidate is flagged suspect and extract_urls drops it.
    """
    text = "mail john.doe@example.com please"
    candidates = list(extract_candidates(text, detect_schemeless=True))
    assert len(candidates) == 1
    assert candidates[0].suspect is True
    assert extract_urls(text, detect_schemeless=True) == []

def test_schemeless_paths_are_suspect():
    for text in ("open /etc/nginx/site.conf", "C:\\Users\\me\\notes.txt"):
        candidates = list(extract_candidates(text, detect_schemeless=True))
        assert candidates, text
        assert all(c.suspect for c in candidates), text

def test_extraction_is_lazy_and_restartable():
    """
    WHY: The pipeline consumes candidates one at a time and may scan again.
    HOW: Take one item from a generator, then call extract_candidates again.
    EXPECTED: Each call yields the full sequence from the start.
    """
    text = "http://a.com http://b.com"
    gen = extract_candidates(text)
    assert next(gen).url == "http://a.com"
    assert [c.url for c in extract_candidates(text)] == ["http://a.com", "http://b.com"]

def test_empty_text():
    assert list(extract_candidates("")) == []
    assert extract_urls(None) == []
