from django.http import HttpResponse, JsonResponse
from django.shortcuts import render
from django.views.decorators.csrf import csrf_exempt

from rx_assist.exceptions import BlockError

from . import serializers, services


def _require_method(request, method):
    if request.method != method:
        raise BlockError(
            message="Method not allowed",
            code="METHOD_NOT_ALLOWED",
            detail={"allowed": [method]},
            http_status=405,
        )


def _request_data(request):
    """JSON body, or the posted form when the browser submits the form itself"""
    if request.content_type == "application/json":
        return serializers.parse_json_body(request.body)
    return request.POST.dict()


# GET shows the empty form; POSTing the patient form renders the suggestions
@csrf_exempt
def index(request):
    if request.method == "POST":
        context = services.get_form_page(request.POST.dict())
    else:
        context = services.get_form_page()
    return render(request, "prescriptions/index.html", context)


# the browser form posts here; errors come back as JSON through AppExceptionMiddleware
@csrf_exempt
def get_ai_suggestions(request):
    _require_method(request, "POST")
    prompt = serializers.parse_ai_suggestions_request(request.body)
    return JsonResponse(services.get_ai_suggestions(prompt))


@csrf_exempt
def suggest_for_patient(request):
    _require_method(request, "POST")
    patient = serializers.validate_patient_data(_request_data(request))
    return JsonResponse(services.suggest_for_patient(patient))


@csrf_exempt
def submit_prescription(request):
    """
    ?download=1 returns the summary as a text attachment instead of JSON
    """
    _require_method(request, "POST")
    submission = serializers.parse_prescription_submission(_request_data(request))
    if request.GET.get("download") == "1":
        content, filename = services.get_prescription_download(submission)
        response = HttpResponse(content, content_type="text/plain; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response
    return JsonResponse(services.submit_prescription(submission))


def medications_csv(request):
    _require_method(request, "GET")
    return HttpResponse(services.read_medications_csv(), content_type="text/csv; charset=utf-8")
