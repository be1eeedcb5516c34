from abc import abstractmethod
from typing import Optional, Sequence

from starlette.responses import JSONResponse

from gas_estimation.utils.logger import LogArgs


class OurMistakes:
    code = 417
    error_owner = 'gas-estimation'


class SourceMistakes:
    code = 409
    error_owner = 'source'


class SourcesUnavailable:
    code = 503
    error_owner = 'sources'


class BaseGasEstimationError(Exception):
    """common error for gas price estimators"""

    @property
    @abstractmethod
    def msg_to_log(self):
        ...

    @property
    @abstractmethod
    def code(self):
        ...

    @property
    @abstractmethod
    def error_owner(self):
        ...

    def __init__(self, estimator: str, message: Optional[str] = None, **kwargs):
        super().__init__(estimator, message)
        self.estimator = estimator
        self.message = message
        self.kwargs = kwargs

    def __str__(self):
        return f'{self.msg_to_log}. Source: {self.estimator}'

    def __repr__(self):
        return f'{self.__class__.__name__}({self.estimator}, {self.message}, {self.kwargs})'

    def to_dict(self):
        return {
            'estimator': self.estimator,
            'reason': self.message,
            'error_owner': self.error_owner,
            **self.kwargs,
        }

    def to_log_args(self):
        return (
            f'{self.msg_to_log.lower()}. Source: %({LogArgs.gas_estimator})s',
            {LogArgs.gas_estimator: self.estimator},
        )

    def to_http_exception(self) -> JSONResponse:
        return JSONResponse(
            {
                'error': str(self),
                'reason': self.message,
                'estimator': self.estimator,
            },
            status_code=self.code,
        )


class TransportError(SourceMistakes, BaseGasEstimationError):
    """Network or HTTP error while talking to the source"""

    msg_to_log = 'Source request failed'


class ParseResponseError(OurMistakes, BaseGasEstimationError):
    """When source returns invalid response, or we parse it wrong"""

    msg_to_log = 'Cannot parse response'


class EstimatorTimeoutError(SourceMistakes, BaseGasEstimationError):
    """When source does not respond within its slice of the time budget"""

    msg_to_log = 'Source is unavailable'


class AllSourcesExhaustedError(SourcesUnavailable, BaseGasEstimationError):
    """Every configured source failed or timed out"""

    msg_to_log = 'Cannot estimate gas price'

    def __init__(self, estimator: str, failures: Sequence[Exception], **kwargs):
        self.failures = list(failures)
        super().__init__(
            estimator,
            '; '.join(f'{i}: {failure!r}' for i, failure in enumerate(self.failures)),
            **kwargs,
        )

    def to_dict(self):
        return {
            **super().to_dict(),
            LogArgs.errors_list: [repr(failure) for failure in self.failures],
            LogArgs.error_count: len(self.failures),
        }


responses = {
    SourceMistakes.code: {
        'description': 'One of the following errors:<br><br>%s<br>%s<br>'
        % (TransportError.msg_to_log, EstimatorTimeoutError.msg_to_log)
    },
    OurMistakes.code: {
        'description': 'One of the following errors:<br><br>%s<br>'
        % (ParseResponseError.msg_to_log,)
    },
    SourcesUnavailable.code: {
        'description': 'One of the following errors:<br><br>%s<br>'
        % (AllSourcesExhaustedError.msg_to_log,)
    },
}
