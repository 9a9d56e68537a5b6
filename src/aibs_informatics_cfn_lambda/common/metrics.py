"""Metrics utilities for AWS Lambda handlers.

Records success and failure counts for handler invocations using
AWS Lambda Powertools metrics.
"""

from typing import Optional, Union

from aws_lambda_powertools.metrics import EphemeralMetrics, Metrics, MetricUnit

from aibs_informatics_cfn_lambda.common.base import HandlerMixins


def add_success_metric(name: str = "", metrics: Optional[Union[EphemeralMetrics, Metrics]] = None):
    """Record a successful operation.

    Adds metrics indicating success (1) and failure (0) counts.

    Args:
        name (str): Prefix for the metric names.
        metrics (Optional[Union[EphemeralMetrics, Metrics]]): The metrics collector to use.
            Creates ephemeral if None.
    """
    if metrics is None:
        metrics = EphemeralMetrics()
    metrics.add_metric(name=f"{name}Success", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"{name}Failure", unit=MetricUnit.Count, value=0)


def add_failure_metric(name: str = "", metrics: Optional[Union[EphemeralMetrics, Metrics]] = None):
    """Record a failed operation.

    Adds metrics indicating success (0) and failure (1) counts.

    Args:
        name (str): Prefix for the metric names.
        metrics (Optional[Union[EphemeralMetrics, Metrics]]): The metrics collector to use.
            Creates ephemeral if None.
    """
    if metrics is None:
        metrics = EphemeralMetrics()
    metrics.add_metric(name=f"{name}Success", unit=MetricUnit.Count, value=0)
    metrics.add_metric(name=f"{name}Failure", unit=MetricUnit.Count, value=1)


class EnhancedMetrics(Metrics):
    """Metrics with success/failure helpers."""

    def add_success_metric(self, name: str = ""):
        add_success_metric(name=name, metrics=self)

    def add_failure_metric(self, name: str = ""):
        add_failure_metric(name=name, metrics=self)


class MetricsMixins(HandlerMixins):
    """Mixin class providing CloudWatch metrics capabilities."""

    @property
    def metrics(self) -> EnhancedMetrics:
        """Get the metrics collector, creating one if needed."""
        try:
            return self._metrics
        except AttributeError:
            self.metrics = self.get_metrics(handler_name=self.handler_name())
        return self.metrics

    @metrics.setter
    def metrics(self, value: EnhancedMetrics):
        self._metrics = value

    @classmethod
    def get_metrics(
        cls,
        service: Optional[str] = None,
        namespace: Optional[str] = None,
        **additional_dimensions: str,
    ) -> EnhancedMetrics:
        """Create a new EnhancedMetrics instance.

        Args:
            service (Optional[str]): The service name for metrics.
            namespace (Optional[str]): The CloudWatch namespace.
            **additional_dimensions (str): Additional metric dimensions as key-value pairs.

        Returns:
            A configured EnhancedMetrics instance.
        """
        metrics = EnhancedMetrics(service=service, namespace=namespace)
        for dimension_name, dimension_value in additional_dimensions.items():
            metrics.add_dimension(name=dimension_name, value=dimension_value)
        return metrics
