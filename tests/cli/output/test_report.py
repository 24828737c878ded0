"""Tests for the experiment report builder."""

from pydantic import BaseModel

from stepscore.cli.output.report import ItemRecorder, build_report, to_jsonable
from stepscore.config.domain.config import ExperimentConfig
from stepscore.config.domain.dataset import DatasetConfig
from stepscore.dataset.domain.item import DataItem
from stepscore.experiment.domain.result import (
    ExperimentResult,
    ExperimentSummary,
    ItemCompletion,
)
from stepscore.experiment.domain.target import ScoringData, TargetResult


class Verdict(BaseModel):
    label: str


def _config() -> ExperimentConfig:
    return ExperimentConfig(
        name="report-test",
        version="2",
        dataset=DatasetConfig(path="data.jsonl"),
        target="app:target",
        scorers=["app:scorer"],
    )


class TestToJsonable:
    def test_models_are_dumped(self) -> None:
        assert to_jsonable({"v": Verdict(label="ok")}) == {"v": {"label": "ok"}}

    def test_unknown_objects_become_strings(self) -> None:
        assert to_jsonable([object]) == [str(object)]


class TestBuildReport:
    async def test_includes_items_and_scores(self) -> None:
        recorder = ItemRecorder()
        item = DataItem(input="q", ground_truth="a")
        await recorder.record(
            ItemCompletion(
                item=item,
                target_result=TargetResult(
                    scoring_data=ScoringData(input="q", output="a")
                ),
                scorer_results={"exact": {"score": 1.0, "reason": None}},
            )
        )
        result = ExperimentResult(
            experiment_id="exp-1",
            scores={"exact": 1.0},
            summary=ExperimentSummary(total_items=1),
        )

        report = build_report(
            experiment_id="exp-1",
            config=_config(),
            dataset_sha256="abc",
            result=result,
            items=recorder.items,
        )

        assert report["experiment"] == {"name": "report-test", "version": "2"}
        assert report["dataset"]["sha256"] == "abc"
        assert report["execution"] == {"concurrency": 1, "sandbox": False}
        assert report["scores"] == {"exact": 1.0}
        assert report["items"] == [
            {
                "input": "q",
                "ground_truth": "a",
                "output": "a",
                "scorer_results": {"exact": {"score": 1.0, "reason": None}},
            }
        ]
