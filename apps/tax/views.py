"""
세금 신고서 뷰

- 소득세 (Form 1): 작성 / 조회 / 수정 / 제출 / 삭제
- 부가세 (Form 3): 작성 / 조회 / 수정 / 제출 / 삭제
- 실시간 계산 미리보기 (JSON)
- 엑셀 내보내기
"""
import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import IntegrityError
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_http_methods, require_POST

from .exports import export_returns_to_excel
from .forms import (
    IncomeTaxPreviewForm,
    IncomeTaxReturnForm,
    SubmitReturnForm,
    VatPreviewForm,
    VatReturnForm,
)
from .models import IncomeTaxReturn, VatReturn
from .utils import (
    TaxInputError,
    calculate_income_tax,
    calculate_vat,
    current_tax_year,
    get_income_tax_rates,
    get_vat_rates,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Helper 함수
# =============================================================================

def _profile_initial(user):
    """프로필 정보로 신고서 초기값 구성 (프로필 없으면 User 정보만)"""
    try:
        return user.profile.get_return_initial()
    except ObjectDoesNotExist:
        return {
            'first_name': user.first_name,
            'last_name': user.last_name,
            'email': user.email,
        }


def _validation_message(error):
    """ValidationError를 한 줄 메시지로"""
    return ' '.join(error.messages)


def _save_return_form(request, form, action):
    """
    신고서 폼 저장 공통 처리

    Returns:
        저장된 신고서 또는 None (실패 시 메시지 추가됨)
    """
    try:
        tax_return = form.save(commit=False)
        if not tax_return.user_id:
            tax_return.user = request.user
        tax_return.save()
    except IntegrityError as e:
        logger.error(f"신고서 {action} 실패 (무결성 제약): user_id={request.user.id}, error={e}")
        messages.error(request, 'A return for this period already exists.')
        return None
    except ValidationError as e:
        logger.warning(f"신고서 검증 실패: user_id={request.user.id}, error={e}")
        messages.error(request, _validation_message(e))
        return None

    logger.info(
        f"신고서 {action}: type={tax_return.return_type}, id={tax_return.pk}, "
        f"user_id={request.user.id}, total_due={tax_return.total_due}"
    )

    if tax_return.credit_capped:
        logger.warning(
            f"MTC 한도 초과: type={tax_return.return_type}, id={tax_return.pk}, "
            f"requested={tax_return.mtc_credit}, applied={tax_return.applied_credit}"
        )
        messages.warning(
            request,
            f'The requested credit was limited to {tax_return.applied_credit} '
            f'(it cannot exceed the tax line).'
        )
    return tax_return


def _return_form_view(request, form_class, template_name, detail_url, tax_return=None):
    """작성/수정 공통 뷰 처리"""
    action = '수정' if tax_return else '작성'

    if request.method == 'POST':
        form = form_class(request.POST, instance=tax_return, user=request.user)
        if form.is_valid():
            saved = _save_return_form(request, form, action)
            if saved is not None:
                messages.success(request, f'{saved} saved as draft.')
                return redirect(detail_url, pk=saved.pk)
        else:
            messages.error(request, 'Please check the highlighted fields.')
    elif tax_return is None:
        form = form_class(initial=_profile_initial(request.user), user=request.user)
    else:
        form = form_class(instance=tax_return, user=request.user)

    context = {
        'form': form,
        'tax_return': tax_return,
        'steps': form.get_steps(),
        'submit_text': 'Save changes' if tax_return else 'Save draft',
    }
    return render(request, template_name, context)


def _detail_context(tax_return):
    """상세 화면 공통 (DRAFT: 제출 폼 / 제출됨: 납부 안내)"""
    result = tax_return.stored_result()
    return {
        'tax_return': tax_return,
        'result': result,
        'lines': result.lines(),
        'submit_form': SubmitReturnForm() if tax_return.is_editable else None,
        'payment_info': None if tax_return.is_editable else getattr(settings, 'TAX_PAYMENT_INFO', None),
    }


def _submit_return(request, tax_return, detail_url):
    """서명 + 확인 후 제출"""
    form = SubmitReturnForm(request.POST)
    if not form.is_valid():
        for errors in form.errors.get_json_data().values():
            for error in errors:
                messages.error(request, error['message'])
        return redirect(detail_url, pk=tax_return.pk)

    try:
        tax_return.submit(form.cleaned_data['signature_data'])
    except ValidationError as e:
        logger.warning(
            f"신고서 제출 거부: type={tax_return.return_type}, id={tax_return.pk}, "
            f"user_id={request.user.id}, error={e}"
        )
        messages.error(request, _validation_message(e))
        return redirect(detail_url, pk=tax_return.pk)

    messages.success(request, f'{tax_return} submitted. Total due: {tax_return.total_due}')
    return redirect(detail_url, pk=tax_return.pk)


def _delete_return(request, tax_return, template_name, detail_url):
    """DRAFT 신고서 삭제 (GET: 확인 페이지, POST: 삭제)"""
    if not tax_return.is_editable:
        logger.warning(
            f"제출된 신고서 삭제 시도: type={tax_return.return_type}, id={tax_return.pk}, "
            f"user_id={request.user.id}"
        )
        messages.error(request, 'Submitted returns cannot be deleted.')
        return redirect(detail_url, pk=tax_return.pk)

    if request.method == 'POST':
        label = str(tax_return)
        pk = tax_return.pk
        try:
            tax_return.delete()
        except ValidationError as e:
            messages.error(request, _validation_message(e))
            return redirect(detail_url, pk=pk)

        logger.info(f"신고서 삭제: {label} (ID: {pk}), user_id={request.user.id}")
        messages.success(request, f'{label} deleted.')
        return redirect('dashboard:index')

    return render(request, template_name, {'tax_return': tax_return})


def _form_errors(form):
    return {
        field: [error['message'] for error in errors]
        for field, errors in form.errors.get_json_data().items()
    }


def _preview_response(result):
    return JsonResponse({
        'lines': {name: str(amount) for name, amount in result.as_dict().items()},
        'credit_capped': result.credit_capped,
    })


# =============================================================================
# 소득세 (Form 1)
# =============================================================================

@login_required
def income_tax_create(request):
    """소득세 신고서 작성 (프로필 정보로 초기값 채움)"""
    return _return_form_view(
        request, IncomeTaxReturnForm, 'tax/income_tax_form.html', 'tax:income_tax_detail'
    )


@login_required
def income_tax_detail(request, pk):
    """
    소득세 신고서 상세

    - 본인 신고서만 조회 가능
    - 라인별 계산 내역 표시
    - DRAFT면 서명/제출 폼 포함
    """
    tax_return = get_object_or_404(IncomeTaxReturn, pk=pk, user=request.user)
    return render(request, 'tax/income_tax_detail.html', _detail_context(tax_return))


@login_required
def income_tax_update(request, pk):
    """소득세 신고서 수정 (DRAFT만)"""
    tax_return = get_object_or_404(IncomeTaxReturn, pk=pk, user=request.user)

    if not tax_return.is_editable:
        messages.error(request, 'Submitted returns cannot be edited.')
        return redirect('tax:income_tax_detail', pk=tax_return.pk)

    return _return_form_view(
        request, IncomeTaxReturnForm, 'tax/income_tax_form.html', 'tax:income_tax_detail',
        tax_return=tax_return,
    )


@login_required
@require_POST
def income_tax_submit(request, pk):
    tax_return = get_object_or_404(IncomeTaxReturn, pk=pk, user=request.user)
    return _submit_return(request, tax_return, 'tax:income_tax_detail')


@login_required
def income_tax_delete(request, pk):
    tax_return = get_object_or_404(IncomeTaxReturn, pk=pk, user=request.user)
    return _delete_return(
        request, tax_return, 'tax/income_tax_confirm_delete.html', 'tax:income_tax_detail'
    )


@login_required
@require_http_methods(['GET', 'POST'])
def income_tax_preview(request):
    """
    소득세 실시간 계산 (JSON)

    잘못된 입력은 400 + 필드별 에러
    """
    data = request.POST if request.method == 'POST' else request.GET
    form = IncomeTaxPreviewForm(data)
    if not form.is_valid():
        return JsonResponse({'errors': _form_errors(form)}, status=400)

    try:
        result = calculate_income_tax(
            rates=get_income_tax_rates(current_tax_year()),
            **form.cleaned_data
        )
    except TaxInputError as e:
        return JsonResponse({'errors': {e.field: [str(e)]}}, status=400)

    return _preview_response(result)


# =============================================================================
# 부가세 (Form 3)
# =============================================================================

@login_required
def vat_create(request):
    return _return_form_view(request, VatReturnForm, 'tax/vat_form.html', 'tax:vat_detail')


@login_required
def vat_detail(request, pk):
    """부가세 신고서 상세 (분기 기간 / 라인별 내역)"""
    vat_return = get_object_or_404(VatReturn, pk=pk, user=request.user)
    return render(request, 'tax/vat_detail.html', _detail_context(vat_return))


@login_required
def vat_update(request, pk):
    vat_return = get_object_or_404(VatReturn, pk=pk, user=request.user)

    if not vat_return.is_editable:
        messages.error(request, 'Submitted returns cannot be edited.')
        return redirect('tax:vat_detail', pk=vat_return.pk)

    return _return_form_view(
        request, VatReturnForm, 'tax/vat_form.html', 'tax:vat_detail', tax_return=vat_return
    )


@login_required
@require_POST
def vat_submit(request, pk):
    vat_return = get_object_or_404(VatReturn, pk=pk, user=request.user)
    return _submit_return(request, vat_return, 'tax:vat_detail')


@login_required
def vat_delete(request, pk):
    vat_return = get_object_or_404(VatReturn, pk=pk, user=request.user)
    return _delete_return(request, vat_return, 'tax/vat_confirm_delete.html', 'tax:vat_detail')


@login_required
@require_http_methods(['GET', 'POST'])
def vat_preview(request):
    """부가세 실시간 계산 (JSON)"""
    data = request.POST if request.method == 'POST' else request.GET
    form = VatPreviewForm(data)
    if not form.is_valid():
        return JsonResponse({'errors': _form_errors(form)}, status=400)

    try:
        result = calculate_vat(rates=get_vat_rates(current_tax_year()), **form.cleaned_data)
    except TaxInputError as e:
        return JsonResponse({'errors': {e.field: [str(e)]}}, status=400)

    return _preview_response(result)


# =============================================================================
# 엑셀 내보내기
# =============================================================================

@login_required
def export_returns(request):
    """본인 신고서 전체를 엑셀로 다운로드 (시트: 소득세 / 부가세)"""
    income_returns = IncomeTaxReturn.objects.for_user(request.user).order_by('-tax_year')
    vat_returns = VatReturn.objects.for_user(request.user).order_by('-tax_year', '-quarter')

    excel_file = export_returns_to_excel(income_returns, vat_returns)
    timestamp = timezone.localtime().strftime('%Y%m%d_%H%M%S')

    logger.info(
        f"신고서 내보내기: user_id={request.user.id}, "
        f"income={income_returns.count()}, vat={vat_returns.count()}"
    )

    filename = f"tax_returns_{request.user.username}_{timestamp}.xlsx"
    response = HttpResponse(
        excel_file.read(),
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
    response['Content-Disposition'] = f'attachment; filename="{filename}"'

    return response
