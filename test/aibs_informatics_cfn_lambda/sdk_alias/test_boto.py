from test.base import AwsBaseTest

import boto3
import pytest
from botocore.exceptions import ClientError

from aibs_informatics_cfn_lambda.sdk_alias import BotoClientApi, SDKAlias, create_alias

PARAMETER_NAME = "/cfn/my-parameter"
GET_PARAMETER_RESPONSE = {
    "Parameter": {
        "Name": PARAMETER_NAME,
        "Type": "String",
        "Value": "hello",
        "Version": 3,
        "ARN": f"arn:aws:ssm:us-west-2:123456789012:parameter{PARAMETER_NAME}",
    }
}


@pytest.mark.usefixtures("aws_credentials_fixture")
class BotoClientApiTests(AwsBaseTest):
    def setUp(self) -> None:
        super().setUp()
        self.client = boto3.client("ssm", region_name=self.DEFAULT_REGION)
        self.stubber = self.stub(self.client)
        self.stubber.activate()
        self.api = BotoClientApi(self.client)

    def tearDown(self) -> None:
        self.stubber.deactivate()
        super().tearDown()

    def get_parameter_alias(self, **options) -> SDKAlias:
        return create_alias(
            api=self.api,
            method="get_parameter",
            physicalIdAs="Name",
            **options,
        )

    def test__getitem__unknown_operation(self):
        with self.assertRaises(KeyError):
            self.api["not_an_operation"]
        self.assertIn("get_parameter", self.api)
        self.assertNotIn("not_an_operation", self.api)

    def test__len__matches_operations(self):
        self.assertEqual(len(self.api), len(list(self.api)))
        self.assertGreater(len(self.api), 0)

    def test__alias__passes_parameters_and_extracts_response(self):
        self.stubber.add_response(
            "get_parameter",
            GET_PARAMETER_RESPONSE,
            expected_params={"Name": PARAMETER_NAME, "WithDecryption": True},
        )
        alias = self.get_parameter_alias(
            keys=["WithDecryption"],
            returnPhysicalId=lambda data: data["Parameter"]["ARN"],
            returnAttrs=lambda data: {"Value": data["Parameter"]["Value"]},
        )

        outcomes = []
        alias(
            PARAMETER_NAME,
            {"WithDecryption": True, "Ignored": "x"},
            lambda *args: outcomes.append(args),
        )

        self.stubber.assert_no_pending_responses()
        self.assertEqual(
            outcomes,
            [(None, GET_PARAMETER_RESPONSE["Parameter"]["ARN"], {"Value": "hello"})],
        )

    def test__alias__forwards_client_errors(self):
        self.stubber.add_client_error(
            "get_parameter",
            service_error_code="ParameterNotFound",
            http_status_code=400,
            expected_params={"Name": PARAMETER_NAME},
        )
        outcomes = []
        self.get_parameter_alias()(PARAMETER_NAME, lambda *args: outcomes.append(args))

        self.assertEqual(len(outcomes), 1)
        error, physical_id, attributes = outcomes[0]
        self.assertIsInstance(error, ClientError)
        self.assertIsNone(physical_id)
        self.assertIsNone(attributes)

    def test__alias__suppresses_ignored_error_code(self):
        self.stubber.add_client_error(
            "get_parameter",
            service_error_code="ParameterNotFound",
            http_status_code=400,
        )
        alias = self.get_parameter_alias(ignoreErrorCodes=["ParameterNotFound"])
        result = alias.invoke(physical_id=PARAMETER_NAME)
        self.assertIsNone(result.physical_id)
        self.assertIsNone(result.attributes)

    def test__alias__suppresses_ignored_http_status(self):
        self.stubber.add_client_error(
            "get_parameter",
            service_error_code="ParameterNotFound",
            http_status_code=404,
        )
        alias = self.get_parameter_alias(ignoreErrorCodes=[404], returnPhysicalId="Name")
        result = alias.invoke(physical_id=PARAMETER_NAME)
        self.assertIsNone(result.physical_id)

    def test__invoke__raises_client_error(self):
        self.stubber.add_client_error(
            "get_parameter",
            service_error_code="AccessDeniedException",
            http_status_code=400,
        )
        with self.assertRaises(ClientError):
            self.get_parameter_alias(ignoreErrorCodes=[404]).invoke(physical_id=PARAMETER_NAME)

    def test__from_service__builds_client(self):
        api = BotoClientApi.from_service("ssm", region="us-east-1")
        self.assertEqual(api.client.meta.region_name, "us-east-1")
        self.assertEqual(repr(api), "BotoClientApi(ssm)")
