# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod

import pendulum

from taskflow.model.filter import ALL, FilterCriteria, StatusFilter
from taskflow.model.task import Task
from taskflow.service.due import is_overdue, search_match


def generate_filter(criteria: FilterCriteria, now: pendulum.DateTime) -> "Predicate":
    """
    Build the conjunctive predicate for a set of filter criteria.

    Category, priority, status and search are applied in that order; any
    unconstrained criterion is left out.
    """
    filter_obj = And()
    if criteria["category"] != ALL:
        filter_obj.add_predicate(Category(criteria["category"]))
    if criteria["priority"] != ALL:
        filter_obj.add_predicate(PriorityLevel(criteria["priority"]))
    if criteria["status"] != StatusFilter.ALL:
        filter_obj.add_predicate(Status(criteria["status"], now))
    if criteria["search_term"].strip():
        filter_obj.add_predicate(Search(criteria["search_term"]))
    return filter_obj


class Predicate(ABC):
    @abstractmethod
    def filter(self, items: list[Task]) -> list[Task]: ...


class And(Predicate):
    def __init__(self) -> None:
        self.predicates: list[Predicate] = []

    def add_predicate(self, predicate: Predicate) -> None:
        self.predicates.append(predicate)

    def filter(self, items: list[Task]) -> list[Task]:
        results = list(items)
        for predicate in self.predicates:
            results = predicate.filter(results)
        return results


class Category(Predicate):
    def __init__(self, category: str) -> None:
        self.category = category

    def filter(self, items: list[Task]) -> list[Task]:
        return [item for item in items if item["category"] == self.category]


class PriorityLevel(Predicate):
    def __init__(self, priority: str) -> None:
        self.priority = priority

    def filter(self, items: list[Task]) -> list[Task]:
        return [item for item in items if item["priority"] == self.priority]


class Status(Predicate):
    def __init__(self, status: str, now: pendulum.DateTime) -> None:
        self.status = status
        self.now = now

    def filter(self, items: list[Task]) -> list[Task]:
        return [item for item in items if self.__include(item)]

    def __include(self, item: Task) -> bool:
        match self.status:
            case StatusFilter.COMPLETED:
                return item["is_completed"]
            case StatusFilter.PENDING:
                return not item["is_completed"]
            case StatusFilter.OVERDUE:
                return is_overdue(item, self.now)
        raise ValueError(f"unknown status filter: {self.status}")


class Search(Predicate):
    def __init__(self, search_term: str) -> None:
        self.search_term = search_term.strip()

    def filter(self, items: list[Task]) -> list[Task]:
        return [item for item in items if search_match(item, self.search_term)]
