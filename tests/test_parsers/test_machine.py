"""Tests for the METAR state machine."""

import pytest
from datetime import datetime

from metar_parser.exceptions import (
    InvalidTransitionError,
    MalformedDateTimeError,
    MalformedLocationError,
    MalformedTemperatureDewPointError,
    UnexpectedTrailingTokensError,
    UnknownSkyConditionTypeError,
)
from metar_parser.models.units import DistanceUnit, PressureUnit, SpeedUnit
from metar_parser.models.groups import (
    Comparator,
    Descriptor,
    Modifier,
    Phenomenon,
    SkyQuantity,
)
from metar_parser.models.report import ObserverMode
from metar_parser.parsers.machine import MetarParser, ParserState, TRANSITIONS, parse
from metar_parser.tokenizer import TokenStream


class TestSpecimenReports:
    """End-to-end parses of representative reports."""

    def test_cavok(self, parser, observation_time):
        report = parser.parse("EGLL 211650Z 24010KT CAVOK 17/12 Q1020", observation_time)

        assert report.station_code == "EGLL"
        assert report.observation_time == observation_time
        assert report.visibility.distance.meters == 10000
        assert report.visibility.comparator == Comparator.MORE_THAN
        assert [w.phenomenon for w in report.present_weather] == [Phenomenon.NO_SIGNIFICANT_WEATHER]
        assert [s.quantity for s in report.sky_conditions] == [SkyQuantity.NO_SIGNIFICANT_CLOUD]
        assert report.runway_visible_range == ()
        assert report.temperature.value == 17
        assert report.dew_point.value == 12
        assert report.sea_level_pressure.value == 1020
        assert report.sea_level_pressure.unit == PressureUnit.HECTOPASCALS

    def test_us_format(self, parser, observation_time):
        report = parser.parse("KJFK 211651Z 18010KT 10SM FEW250 24/18 A3000", observation_time)

        assert report.wind.direction.degrees == 180
        assert report.wind.speed.value == 10
        assert report.wind.speed.unit == SpeedUnit.KNOTS
        assert report.visibility.distance.units == DistanceUnit.MILES
        assert report.visibility.distance.value == pytest.approx(10)
        assert len(report.sky_conditions) == 1
        assert report.sky_conditions[0].quantity == SkyQuantity.FEW
        assert report.sky_conditions[0].height.meters == pytest.approx(7500)
        assert report.temperature.value == 24
        assert report.dew_point.value == 18
        assert report.sea_level_pressure.value == pytest.approx(30.00)
        assert report.sea_level_pressure.unit == PressureUnit.INCHES_OF_MERCURY

    def test_degraded_observation(self, parser, observation_time):
        report = parser.parse("AAAA 010000Z AUTO //// 10/05 Q1000", observation_time)

        assert report.observer == ObserverMode.AUTO
        assert report.wind is None
        assert not report.visibility.observed
        assert report.visibility.distance.is_unknown
        assert report.temperature.value == 10
        assert report.dew_point.value == 5

    def test_present_weather_order(self, parser, observation_time):
        report = parser.parse("EGLL 211650Z 24010KT 4000 +TSRA BR BKN010CB 17/16 Q1002", observation_time)

        first, second = report.present_weather
        assert first.modifier == Modifier.HEAVY
        assert first.descriptor == Descriptor.THUNDERSTORM_AND
        assert first.phenomenon == Phenomenon.RAIN
        assert second.phenomenon == Phenomenon.MIST
        assert second.modifier is None

    def test_variable_runway_visible_range(self, parser, observation_time):
        report = parser.parse("KORD 211651Z 27008KT 1/2SM R24/0600V1500FT FG VV002 10/10 A2992", observation_time)

        rvr, = report.runway_visible_range
        assert rvr.designator == "24"
        assert rvr.units == DistanceUnit.FEET
        assert rvr.visibility1.distance.value == pytest.approx(600)
        assert rvr.visibility2.distance.value == pytest.approx(1500)
        assert report.vertical_visibility.distance.meters == pytest.approx(60)
        assert report.sky_conditions == ()

    def test_full_wmo_report(self, parser, observation_time):
        report = parser.parse(
            "LFPG 211230Z 24015G25KT 200V280 0800 R27L/0550U R27R/P1500N -SHRA FZFG "
            "SCT005 BKN010TCU OVC020 M02/M05 Q0998",
            observation_time,
        )

        assert report.wind.gust.value == 25
        assert report.variable_wind.direction1.degrees == 200
        assert report.variable_wind.direction2.degrees == 280
        assert report.visibility.distance.meters == 800
        assert [r.designator for r in report.runway_visible_range] == ["27L", "27R"]
        assert [w.key for w in report.present_weather] == ["light shower_of rain", "freezing fog"]
        assert [s.key for s in report.sky_conditions] == ["scattered", "broken towering_cumulus", "overcast"]
        assert report.temperature.value == -2
        assert report.dew_point.value == -5

    def test_mixed_fraction_visibility(self, parser, observation_time):
        report = parser.parse("KJFK 211651Z 18010KT 1 1/2SM BR OVC005 12/11 A2990", observation_time)
        assert report.visibility.distance.value == pytest.approx(1.5)
        assert report.present_weather[0].phenomenon == Phenomenon.MIST

    def test_less_than_quarter_mile(self, parser, observation_time):
        report = parser.parse("KJFK 211651Z 18010KT M1/4SM FG VV001 12/12 A2990", observation_time)
        assert report.visibility.comparator == Comparator.LESS_THAN

    def test_corrected(self, parser, observation_time):
        report = parser.parse("EGLL 211650Z COR 24010KT 9999 FEW020 17/12 Q1020", observation_time)
        assert report.observer == ObserverMode.CORRECTED
        assert report.wind.direction.degrees == 240

    def test_auto_not_observed_weather_and_sky(self, parser, observation_time):
        report = parser.parse("LFXX 211650Z AUTO 24010KT 9999 // /// 17/12 Q1020", observation_time)
        assert [w.phenomenon for w in report.present_weather] == [Phenomenon.NOT_OBSERVED]
        assert [s.quantity for s in report.sky_conditions] == [SkyQuantity.NOT_OBSERVED]

    def test_clear_sky(self, parser, observation_time):
        report = parser.parse("KJFK 211651Z 18010KT 10SM CLR 24/18 A3000", observation_time)
        assert report.sky_conditions[0].is_clear

    def test_missing_temperatures(self, parser, observation_time):
        report = parser.parse("EGLL 211650Z 24010KT 9999 FEW020 XX/XX Q1020", observation_time)
        assert report.temperature.is_missing
        assert report.dew_point.is_missing


class TestAutoSentinels:
    """Test the not-observed slash groups of automatic stations."""

    @pytest.mark.parametrize("text", [
        "EGLL 211650Z 24010KT //// 17/12",
        "EGLL 211650Z 24010KT 9999 // 17/12",
        "EGLL 211650Z 24010KT 9999 ////// 17/12",
    ])
    def test_require_auto_observer(self, parser, observation_time, text):
        with pytest.raises(MalformedTemperatureDewPointError) as exc_info:
            parser.parse(text, observation_time)
        assert set(exc_info.value.token) == {"/"}

    def test_six_slash_sky(self, parser, observation_time):
        report = parser.parse("LFXX 211650Z AUTO 24010KT 9999 ////// 17/12 Q1020", observation_time)
        assert [s.quantity for s in report.sky_conditions] == [SkyQuantity.NOT_OBSERVED]
        assert report.vertical_visibility is None

    def test_corrected_is_not_auto(self, parser, observation_time):
        with pytest.raises(MalformedTemperatureDewPointError):
            parser.parse("EGLL 211650Z COR 24010KT 9999 // 17/12", observation_time)


class TestRemarks:
    """Test remark capture."""

    def test_remarks_after_marker(self, parser, observation_time):
        report = parser.parse("KJFK 211651Z 18010KT 10SM FEW250 24/18 A3000 RMK AO2 SLP160 T02440183", observation_time)
        assert report.remarks == ("AO2", "SLP160", "T02440183")

    def test_trailing_tokens_become_remarks(self, parser, observation_time):
        report = parser.parse("EGLL 211650Z 24010KT CAVOK 17/12 Q1020 NOSIG", observation_time)
        assert report.remarks == ("NOSIG",)

    def test_no_remarks(self, parser, observation_time):
        report = parser.parse("EGLL 211650Z 24010KT CAVOK 17/12 Q1020", observation_time)
        assert report.remarks == ()

    def test_marker_only(self, parser, observation_time):
        report = parser.parse("EGLL 211650Z 24010KT CAVOK 17/12 RMK", observation_time)
        assert report.remarks == ()
        assert report.sea_level_pressure is None


class TestErrors:
    """Test fail-fast errors on mandatory groups."""

    def test_malformed_location(self, parser, observation_time):
        with pytest.raises(MalformedLocationError) as exc_info:
            parser.parse("123 211650Z 24010KT CAVOK 17/12 Q1020", observation_time)
        assert exc_info.value.token == "123"
        assert "location" in exc_info.value.expected

    def test_empty_report(self, parser, observation_time):
        with pytest.raises(MalformedLocationError) as exc_info:
            parser.parse("", observation_time)
        assert exc_info.value.token is None

    def test_malformed_datetime(self, parser, observation_time):
        with pytest.raises(MalformedDateTimeError) as exc_info:
            parser.parse("EGLL 2116Z 24010KT CAVOK 17/12", observation_time)
        assert exc_info.value.token == "2116Z"

    def test_out_of_range_datetime(self, parser, observation_time):
        with pytest.raises(MalformedDateTimeError):
            parser.parse("EGLL 321650Z 24010KT CAVOK 17/12", observation_time)

    def test_missing_temperature(self, parser, observation_time):
        with pytest.raises(MalformedTemperatureDewPointError) as exc_info:
            parser.parse("EGLL 211650Z 24010KT 9999 FEW020 Q1020", observation_time)
        assert exc_info.value.token == "Q1020"
        assert str(exc_info.value).endswith("found 'Q1020'")

    def test_unrecognized_group_before_temperature(self, parser, observation_time):
        with pytest.raises(MalformedTemperatureDewPointError) as exc_info:
            parser.parse("EGLL 211650Z 24010KT 9999 RERA FEW020 17/12", observation_time)
        assert exc_info.value.token == "RERA"

    def test_unknown_sky_condition_type(self, parser, observation_time):
        with pytest.raises(UnknownSkyConditionTypeError) as exc_info:
            parser.parse("EGLL 211650Z 24010KT 9999 FEW020XX 17/12 Q1020", observation_time)
        assert exc_info.value.token == "FEW020XX"

    def test_overlong_cloud_height(self, parser, observation_time):
        with pytest.raises(MalformedTemperatureDewPointError) as exc_info:
            parser.parse("EGLL 211650Z 24010KT 9999 BKN0100 17/12", observation_time)
        assert exc_info.value.token == "BKN0100"

    def test_trailing_tokens(self, parser):
        with pytest.raises(UnexpectedTrailingTokensError) as exc_info:
            parser._seek_end(TokenStream(["A", "B"]), {})
        assert exc_info.value.token == "A B"

    def test_invalid_transition(self, observation_time):
        class SkippingParser(MetarParser):
            def _seek_location(self, tokens, fields):
                tokens.pop()
                return ParserState.WIND, {'station_code': 'EGLL'}

        with pytest.raises(InvalidTransitionError):
            SkippingParser().parse("EGLL 211650Z 17/12", observation_time)


class TestAutomaton:
    """Test properties of the state machine as a whole."""

    def _trace(self, text, observation_time):
        transitions = []
        parser = MetarParser(
            distance_units="kilometers",
            height_units="meters",
            listener=lambda source, target, left: transitions.append((source, target, left)),
        )
        parser.parse(text, observation_time)
        return transitions

    def test_token_count_never_grows(self, observation_time):
        text = "KJFK 211651Z 18010KT 1 1/2SM R04R/2000FT BR OVC005 12/11 A2990 RMK AO2"
        transitions = self._trace(text, observation_time)

        counts = [len(text.split())] + [left for _, _, left in transitions]
        assert all(after <= before for before, after in zip(counts, counts[1:]))
        assert counts[-1] == 0
        assert transitions[-1][1] == ParserState.END

    def test_normal_path_visits_every_state(self, observation_time):
        transitions = self._trace("EGLL 211650Z 24010KT 9999 FEW020 17/12 Q1020", observation_time)
        targets = [target for _, target, _ in transitions]
        assert targets == [
            ParserState.LOCATION,
            ParserState.DATETIME,
            ParserState.WIND,
            ParserState.VARIABLE_WIND,
            ParserState.VISIBILITY,
            ParserState.RUNWAY_VISIBLE_RANGE,
            ParserState.PRESENT_WEATHER,
            ParserState.SKY_CONDITIONS,
            ParserState.TEMPERATURE_DEW_POINT,
            ParserState.SEA_LEVEL_PRESSURE,
            ParserState.REMARKS,
            ParserState.END,
        ]

    def test_cavok_skips_to_sky_conditions(self, observation_time):
        transitions = self._trace("EGLL 211650Z 24010KT CAVOK 17/12 Q1020", observation_time)
        targets = [target for _, target, _ in transitions]
        assert (ParserState.VARIABLE_WIND, ParserState.SKY_CONDITIONS) in [(s, t) for s, t, _ in transitions]
        assert ParserState.RUNWAY_VISIBLE_RANGE not in targets
        assert ParserState.PRESENT_WEATHER not in targets

    def test_cavok_does_not_collect_following_groups(self, parser, observation_time):
        with pytest.raises(MalformedTemperatureDewPointError) as exc_info:
            parser.parse("EGLL 211650Z 24010KT CAVOK R24/0600 17/12", observation_time)
        assert exc_info.value.token == "R24/0600"

    def test_every_state_has_transitions(self):
        assert set(TRANSITIONS) == set(ParserState)
        assert TRANSITIONS[ParserState.END] == frozenset()

    def test_idempotent(self, parser, observation_time):
        text = "LFPG 211230Z 24015G25KT 200V280 0800 R27L/0550U -SHRA BKN010 M02/M05 Q0998 RMK X"
        assert parser.parse(text, observation_time) == parser.parse(text, observation_time)

    def test_iso_observation_time(self, parser):
        report = parser.parse("EGLL 211650Z 24010KT CAVOK 17/12 Q1020", "2024-06-21T16:50:00")
        assert report.observation_time == datetime(2024, 6, 21, 16, 50)

    def test_module_level_parse(self, observation_time):
        report = parse("EGLL 211650Z 24010KT CAVOK 17/12 Q1020", observation_time, distance_units="miles")
        assert report.visibility.distance.units == DistanceUnit.MILES
        assert report.visibility.distance.value == pytest.approx(6.2137, abs=1e-4)

    def test_unknown_units(self):
        with pytest.raises(ValueError):
            MetarParser(distance_units="leagues")
