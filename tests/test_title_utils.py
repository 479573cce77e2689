"""
Tests for utils/title_utils.py

Coverage:
- Candidate title order and de-duplication
- Search variations (year, season suffix, punctuation, leading article)
- Combined search terms
"""

from models.models import AnimeRecord
from utils.title_utils import extract_title_variations, generate_search_variations, get_all_search_terms


class TestExtractTitleVariations:
    """Test extract_title_variations()."""

    def test_order_english_main_japanese_synonyms(self, sample_anime_attack_on_titan):
        """English first, then main, Japanese and synonyms."""
        assert extract_title_variations(sample_anime_attack_on_titan) == [
            "Attack on Titan",
            "Shingeki no Kyojin",
            "進撃の巨人",
            "AoT",
            "SnK",
        ]

    def test_duplicates_removed(self):
        anime = AnimeRecord(id=1, title="Dandadan", title_english="Dandadan", synonyms=["Dandadan", "DAN DA DAN"])
        assert extract_title_variations(anime) == ["Dandadan", "DAN DA DAN"]

    def test_blank_titles_skipped(self):
        anime = AnimeRecord(id=1, title="Dandadan", title_english="   ", title_japanese="", synonyms=[""])
        assert extract_title_variations(anime) == ["Dandadan"]

    def test_only_main_title(self):
        assert extract_title_variations(AnimeRecord(id=1, title="Mushishi")) == ["Mushishi"]


class TestGenerateSearchVariations:
    """Test generate_search_variations()."""

    def test_original_first(self):
        variations = generate_search_variations("Kaguya-sama: Love is War")
        assert variations[0] == "Kaguya-sama: Love is War"

    def test_year_in_parens_stripped(self):
        assert "Attack on Titan" in generate_search_variations("Attack on Titan (2013)")

    def test_season_suffix_and_leading_article(self):
        variations = generate_search_variations("The Rising of the Shield Hero Season 2")
        assert "The Rising of the Shield Hero" in variations
        assert "Rising of the Shield Hero Season 2" in variations

    def test_part_suffix_stripped(self):
        assert "Jujutsu Kaisen" in generate_search_variations("Jujutsu Kaisen Part 2")

    def test_punctuation_variants(self):
        variations = generate_search_variations("Kaguya-sama: Love is War")
        assert "Kaguya sama Love is War" in variations
        assert "Kaguya-sama Love is War" in variations

    def test_exclamation_and_question_marks(self):
        assert "K-On" in generate_search_variations("K-On!")
        assert "Who Killed Sakura" in generate_search_variations("Who Killed Sakura?")

    def test_transforms_not_chained(self):
        """Year and leading article are each removed on their own, never both."""
        variations = generate_search_variations("The Apothecary Diaries (2023)")
        assert "The Apothecary Diaries" in variations
        assert "Apothecary Diaries (2023)" in variations
        assert "Apothecary Diaries" not in variations

    def test_no_duplicates(self):
        variations = generate_search_variations("Mushishi")
        assert variations == ["Mushishi"]

    def test_japanese_title_kept(self):
        assert generate_search_variations("葬送のフリーレン") == ["葬送のフリーレン"]


class TestGetAllSearchTerms:
    """Test get_all_search_terms()."""

    def test_expands_every_candidate(self):
        anime = AnimeRecord(id=1, title="Shingeki no Kyojin", title_english="Attack on Titan (2013)")
        terms = get_all_search_terms(anime)
        assert terms[0] == "Attack on Titan (2013)"
        assert "Attack on Titan" in terms
        assert "Shingeki no Kyojin" in terms
        assert len(terms) == len(set(terms))
