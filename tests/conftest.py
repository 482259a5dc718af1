"""Shared fixtures: sample HiAnime markup, a controllable clock, wired services."""
from unittest.mock import AsyncMock

import pytest

from hianime_desktop.app import create_app
from hianime_desktop.core.caching import ResultCache
from hianime_desktop.core.config import TestingConfig
from hianime_desktop.models.storage import AppStorage
from hianime_desktop.scrapers.hianime.base import HianimeBaseClient
from hianime_desktop.scrapers.hianime.hianime import HianimeScraper

BASE_URL = "https://hianime.test"

LISTING_HTML = """
<html><body>
<div class="film_list-wrap">
  <div class="flw-item">
    <div class="film-poster">
      <img data-src="https://img.test/frieren.jpg" src="placeholder.gif">
      <a href="/watch/frieren-18542"></a>
    </div>
    <div class="film-detail">
      <h3 class="film-name"><a href="/watch/frieren-18542">Frieren: Beyond Journey's End</a></h3>
      <div class="fd-infor">Released: 2021, TV, 12 eps</div>
    </div>
  </div>
  <div class="flw-item">
    <div class="film-poster">
      <img src="https://img.test/suzume.jpg">
      <a href="/watch/suzume-18147?ref=search"></a>
    </div>
    <div class="film-detail">
      <h3 class="film-name"><a href="/watch/suzume-18147">Suzume</a></h3>
      <div class="fd-infor"><span>Movie</span><span>2022</span><span>1 Ep</span></div>
    </div>
  </div>
  <div class="flw-item">
    <div class="film-detail">
      <h3 class="film-name"><a href="/watch/bare-card-1">Bare Card</a></h3>
    </div>
  </div>
</div>
</body></html>
"""

DETAIL_HTML = """
<html><body>
<div class="anis-content">
  <div class="film-poster"><img src="https://img.test/frieren-large.jpg"></div>
  <div class="anisc-detail">
    <h3 class="film-name">Frieren: Beyond Journey's End</h3>
    <div class="film-description"><div class="text"> An elf mage outlives her party. </div></div>
  </div>
  <div class="anisc-info">
    <div class="item"><span class="item-title">Aired:</span><span class="name">Sep 29, 2023 to Mar 22, 2024</span></div>
    <div class="item"><span class="item-title">Status:</span><span class="name">Finished Airing</span></div>
    <div class="item"><span class="item-title">MAL Score:</span><span class="name">9.31</span></div>
    <div class="item"><span class="item-title">Genres:</span>
      <a href="/genre/adventure">Adventure</a>
      <a href="/genre/drama">Drama</a>
      <a href="/genre/fantasy">Fantasy</a>
    </div>
  </div>
</div>
<div class="ss-list">
  <a href="/watch/frieren-18542?ep=107257" data-id="107257" data-number="1">The Journey's End</a>
  <a href="/watch/frieren-18542?ep=107258" data-id="107258" data-number="7">It Didn't Have to Be Magic...</a>
  <a href="/watch/frieren-18542?ep=107259" data-id="107259" data-number="3"></a>
</div>
</body></html>
"""

GENRES_HTML = """
<div class="genre-list">
  <a href="/genre/action">Action</a>
  <a href="/genre/slice-of-life">Slice of Life</a>
</div>
"""


class FakeClock:
    """Callable clock the tests move by hand"""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResultCache(freshness=300, staleness=1800, clock=clock)


@pytest.fixture
def client():
    client = HianimeBaseClient(BASE_URL)
    client.fetch = AsyncMock(return_value=LISTING_HTML)
    return client


@pytest.fixture
def scraper(client, cache):
    return HianimeScraper(client, cache)


@pytest.fixture
def storage(tmp_path, clock):
    return AppStorage(tmp_path / "storage.json", clock=clock)


@pytest.fixture
def app(scraper, storage):
    app = create_app(TestingConfig, scraper=scraper, storage=storage)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def http(app):
    with app.test_client() as test_client:
        yield test_client
