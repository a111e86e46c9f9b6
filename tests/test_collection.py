"""Tests for ReportCollection."""

import logging
import pytest
from datetime import datetime

from metar_parser.collection import DATAFRAME_COLUMNS, ReportCollection
from metar_parser.exceptions import MalformedTemperatureDewPointError
from metar_parser.models.report import ObserverMode
from metar_parser.raw import RawReport


@pytest.fixture
def raw_reports():
    return [
        RawReport("EGLL 211620Z 24010KT CAVOK 17/12 Q1020", datetime(2024, 6, 21, 16, 20)),
        RawReport("EGLL 211650Z 24012G22KT 9999 FEW020 18/12 Q1019", datetime(2024, 6, 21, 16, 50)),
        RawReport("KJFK 211651Z AUTO 18010KT 10SM FEW250 24/18 A3000 RMK AO2", datetime(2024, 6, 21, 16, 51)),
    ]


@pytest.fixture
def collection(raw_reports, parser):
    return ReportCollection.from_raw(raw_reports, parser=parser)


class TestFromRaw:
    """Test batch parsing."""

    def test_parses_all(self, collection):
        assert len(collection) == 3
        assert collection.count() == 3

    def test_raises_without_skip(self, raw_reports, parser):
        raw_reports.append(RawReport("EGLL 211720Z 24010KT 9999 Q1020", datetime(2024, 6, 21, 17, 20)))
        with pytest.raises(MalformedTemperatureDewPointError):
            ReportCollection.from_raw(raw_reports, parser=parser)

    def test_skip_errors(self, raw_reports, parser, caplog):
        raw_reports.append(RawReport("EGLL 211720Z 24010KT 9999 Q1020", datetime(2024, 6, 21, 17, 20)))
        with caplog.at_level(logging.WARNING, logger="metar_parser.collection"):
            reports = ReportCollection.from_raw(raw_reports, parser=parser, skip_errors=True)
        assert len(reports) == 3
        assert "Skipping unparseable report" in caplog.text

    def test_default_parser(self, raw_reports):
        assert len(ReportCollection.from_raw(raw_reports)) == 3


class TestFilters:
    """Test filtering and ordering."""

    def test_for_station(self, collection):
        assert [r.station_code for r in collection.for_station("egll")] == ["EGLL", "EGLL"]

    def test_with_observer(self, collection):
        auto = collection.with_observer(ObserverMode.AUTO)
        assert [r.station_code for r in auto] == ["KJFK"]

    def test_latest(self, collection):
        assert collection.for_station("EGLL").latest().observation_time == datetime(2024, 6, 21, 16, 50)
        assert collection.latest().station_code == "KJFK"

    def test_empty(self):
        empty = ReportCollection([])
        assert empty.latest() is None
        assert empty.first() is None

    def test_chronological(self, collection):
        times = [r.observation_time for r in collection.chronological()]
        assert times == sorted(times)

    def test_filter(self, collection):
        warm = collection.filter(lambda r: r.temperature.value > 20)
        assert warm.first().station_code == "KJFK"


class TestExport:
    """Test dict and DataFrame export."""

    def test_to_dicts(self, collection):
        dicts = collection.to_dicts()
        assert [d['station_code'] for d in dicts] == ["EGLL", "EGLL", "KJFK"]

    def test_to_dataframe(self, collection):
        df = collection.to_dataframe()

        assert list(df.columns) == DATAFRAME_COLUMNS
        assert len(df) == 3

        gusty = df.iloc[1]
        assert gusty['wind_direction'] == 240
        assert gusty['wind_speed'] == 12
        assert gusty['wind_gust'] == 22
        assert gusty['wind_unit'] == "knots"
        assert gusty['sky_conditions'] == "few"

        us = df.iloc[2]
        assert us['observer'] == "auto"
        assert us['pressure_hpa'] == pytest.approx(30.0 * 33.8639)
        assert us['remarks'] == "AO2"

        cavok = df.iloc[0]
        assert cavok['visibility_comparator'] == "more_than"
        assert cavok['present_weather'] == "no_significant_weather"

    def test_empty_dataframe(self):
        df = ReportCollection([]).to_dataframe()
        assert list(df.columns) == DATAFRAME_COLUMNS
        assert df.empty
