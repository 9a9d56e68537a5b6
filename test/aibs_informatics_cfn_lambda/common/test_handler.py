from dataclasses import dataclass
from test.aibs_informatics_cfn_lambda.base import LambdaHandlerTestCase, LambdaHandlerType

from aibs_informatics_core.models.aws.s3 import S3URI
from aibs_informatics_core.models.base import SchemaModel

from aibs_informatics_cfn_lambda.common.handler import LambdaHandler
from aibs_informatics_cfn_lambda.handlers.sdk_alias.model import (
    SDKAliasRequest,
    SDKAliasResponse,
)


@dataclass
class NoResponse(SchemaModel):
    pass


class EchoPhysicalIdHandler(LambdaHandler[SDKAliasRequest, SDKAliasResponse]):
    def handle(self, request: SDKAliasRequest) -> SDKAliasResponse:
        self.log.info(f"Echoing {request.physical_id}")
        return SDKAliasResponse(
            physical_id=request.physical_id,
            attributes={"PropertyCount": len(request.properties)},
        )


class NoopHandler(LambdaHandler[SDKAliasRequest, NoResponse]):
    def handle(self, request: SDKAliasRequest) -> None:
        self.log.info(f"Ignoring {request.physical_id}")


class LambdaHandlerTests(LambdaHandlerTestCase):
    def test__props__work(self):
        obj_handler = LambdaHandler()
        self.assertEqual(obj_handler.env_base, self.env_base)
        obj_handler.context

    def test__handle__method_is_not_implemented(self):
        with self.assertRaises(NotImplementedError):
            LambdaHandler().handle({})

    def test__context__raises_when_not_set(self):
        obj_handler = LambdaHandler()
        del obj_handler._context
        with self.assertRaises(ValueError):
            obj_handler.context

    def test__load_input__remote__downloads_json(self):
        mock_download = self.create_patch(
            "aibs_informatics_cfn_lambda.common.handler.download_to_json_object"
        )
        mock_download.return_value = {"physical_id": "abc"}
        remote_path = S3URI("s3://bucket/input.json")

        self.assertEqual(LambdaHandler.load_input__remote(remote_path), {"physical_id": "abc"})
        mock_download.assert_called_once_with(remote_path)

    def test__write_output__remote__uploads_json(self):
        mock_upload = self.create_patch("aibs_informatics_cfn_lambda.common.handler.upload_json")
        remote_path = S3URI("s3://bucket/output.json")

        LambdaHandler.write_output__remote({"physical_id": "abc"}, remote_path)
        mock_upload.assert_called_once_with({"physical_id": "abc"}, remote_path)


class NoopHandlerTests(LambdaHandlerTestCase):
    @property
    def handler(self) -> LambdaHandlerType:
        return NoopHandler.get_handler()

    def test__handler__handles_valid_request_and_returns_no_response(self):
        self.assertHandles(self.handler, SDKAliasRequest(physical_id="abc").to_dict(), None)


class EchoPhysicalIdHandlerTests(LambdaHandlerTestCase):
    @property
    def handler(self) -> LambdaHandlerType:
        return EchoPhysicalIdHandler.get_handler()

    def test__handler__handles_valid_request_and_returns_response(self):
        self.assertHandles(
            self.handler,
            SDKAliasRequest(physical_id="abc", properties={"A": 1, "B": 2}).to_dict(),
            SDKAliasResponse(physical_id="abc", attributes={"PropertyCount": 2}).to_dict(),
        )

    def test__handler__handles_invalid_request_and_raises_error(self):
        self.assertLambdaRaises(self.handler, {"properties": "not a dict"}, Exception)

    def test__logger_and_metrics__are_created_lazily(self):
        obj_handler = EchoPhysicalIdHandler()
        self.assertIs(obj_handler.log, obj_handler.logger)
        self.assertIs(obj_handler.metrics, obj_handler.metrics)
